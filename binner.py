"""
Binner - Statistical Histogram Binning for Numeric Columns

This module turns a single numeric column (from a Parquet file, a pandas
DataFrame, a PyArrow Table or any sequence of optional numbers) into a
labeled histogram. Bin edges are chosen by one of several classification
algorithms, or supplied directly by the caller.

Pipeline Overview:
1. Load the column and normalise it to float64 (nulls become NaN)
2. Compute column statistics in one pass plus a single sort
3. Compute bin edges with the selected strategy:
   - Jenks natural breaks (exact Fisher optimisation)
   - Quantile (equal frequency, linear interpolation)
   - Equal interval
   - Standard deviation (symmetric around the mean)
   - Head/tail breaks (for heavy-tailed data)
   - Custom edges (optionally with a separate null bucket)
4. Assign every value to exactly one bucket:
   underflow | data bins [a, b) | overflow | null
5. Assemble metadata and bins into an immutable result record

Boundary convention: data bins are half-open [edges[i], edges[i+1]).
A value below the first edge is underflow; a value greater than or equal
to the last edge is overflow.

License: MIT
Version: 1.0.0
"""

import pyarrow as pa
import pyarrow.compute as pc
import pyarrow.parquet as pq
import pandas as pd
import numpy as np
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union, List, Optional, Tuple, Dict, Sequence
import logging
import math
import warnings

__version__ = "1.0.0"
__all__ = [
    'bin_column', 'bin_parquet', 'list_columns', 'load_column', 'Binner',
    'Jenks', 'Quantile', 'EqualInterval', 'StandardDeviation', 'HeadTail',
    'Custom', 'parse_algorithm', 'compute_edges', 'ColumnStatistics',
    'HistogramBuilder', 'ResultAssembler', 'HistogramResult',
    'HistogramMetadata', 'Bin', 'BinnerError',
]

logger = logging.getLogger(__name__)


DEFAULT_NUM_BINS = 5              # Bin count when the caller gives none
DEFAULT_STD_DEV_SIZE = 1.0        # Standard deviations per bin
HEAD_TAIL_THRESHOLD = 0.4         # Max head share of the working set to keep splitting
MAX_HEAD_TAIL_ITERATIONS = 100    # Hard cap on head/tail levels
MAX_STD_DEV_BINS = 10_000         # Largest grid a standard deviation size may produce
NULL_BIN_TOKEN = "null"           # Custom edge token requesting a null bucket
LABEL_PRECISION = 3               # Decimals shown in "[a, b)" labels

ColumnLike = Union[Sequence[Optional[float]], np.ndarray, pd.Series,
                   pa.Array, pa.ChunkedArray]
SourceLike = Union[str, Path, pd.DataFrame, pa.Table]


# ============================================================================
# Errors
# ============================================================================

class BinnerError(ValueError):
    """
    Base class for every failure raised by the binner.

    Each subclass carries a ``kind`` identifying the failure, and the
    string form of the error is ``"<kind>: <message>"`` so that callers
    (and the CLI) can surface an identifiable, human-readable diagnostic.
    """
    kind = "BinnerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class SourceNotFoundError(BinnerError):
    kind = "SourceNotFound"


class ColumnNotFoundError(BinnerError):
    kind = "ColumnNotFound"


class InvalidAlgorithmNameError(BinnerError):
    kind = "InvalidAlgorithmName"


class InvalidNumBinsError(BinnerError):
    kind = "InvalidNumBins"


class InvalidParameterError(BinnerError):
    kind = "InvalidParameter"


class InvalidNumberOfBinEdgesError(BinnerError):
    kind = "InvalidNumberOfBinEdges"


class InvalidBinValueError(BinnerError):
    kind = "InvalidBinValue"


class EmptyNumericDataError(BinnerError):
    kind = "EmptyNumericData"


# ============================================================================
# Binning Strategies
# ============================================================================

def _check_num_bins(num_bins: int, minimum: int, algorithm: str):
    if isinstance(num_bins, bool) or not isinstance(num_bins, (int, np.integer)):
        raise InvalidNumBinsError(
            f"{algorithm} requires an integer number of bins, got {num_bins!r}"
        )
    if num_bins < minimum:
        raise InvalidNumBinsError(
            f"{algorithm} requires at least {minimum} bin(s), got {num_bins}"
        )


@dataclass(frozen=True)
class EqualInterval:
    """Split [min, max] into ``num_bins`` intervals of equal width."""
    num_bins: int = DEFAULT_NUM_BINS
    name = "EqualInterval"

    def __post_init__(self):
        _check_num_bins(self.num_bins, 1, self.name)


@dataclass(frozen=True)
class Quantile:
    """Edges at the i/n quantiles, so bins hold roughly equal counts."""
    num_bins: int = DEFAULT_NUM_BINS
    name = "Quantile"

    def __post_init__(self):
        _check_num_bins(self.num_bins, 1, self.name)


@dataclass(frozen=True)
class Jenks:
    """Natural breaks minimising the within-class sum of squared deviations."""
    num_bins: int = DEFAULT_NUM_BINS
    name = "Jenks"

    def __post_init__(self):
        _check_num_bins(self.num_bins, 2, self.name)


@dataclass(frozen=True)
class StandardDeviation:
    """
    Bins ``size`` standard deviations wide, centred on the mean.

    The grid width follows from the data; ``num_bins`` is the requested
    count, validated and reported in the metadata like the other
    algorithms.
    """
    size: float = DEFAULT_STD_DEV_SIZE
    num_bins: int = DEFAULT_NUM_BINS
    name = "StandardDeviation"

    def __post_init__(self):
        _check_num_bins(self.num_bins, 1, self.name)
        if isinstance(self.size, bool) or not isinstance(self.size, (int, float, np.number)):
            raise InvalidParameterError(
                f"Standard deviation size must be a number, got {self.size!r}"
            )
        if not math.isfinite(self.size) or self.size <= 0:
            raise InvalidParameterError(
                f"Standard deviation size must be positive, got {self.size}"
            )


@dataclass(frozen=True)
class HeadTail:
    """
    Head/tail breaks for heavy-tailed distributions.

    Args:
        threshold: Largest share of the working set the head may hold for
            splitting to continue
        max_iterations: Upper bound on the number of levels
    """
    threshold: float = HEAD_TAIL_THRESHOLD
    max_iterations: int = MAX_HEAD_TAIL_ITERATIONS
    name = "HeadTail"

    def __post_init__(self):
        if not 0 < self.threshold < 1:
            raise InvalidParameterError(
                f"Head/tail threshold must be between 0 and 1, got {self.threshold}"
            )
        if self.max_iterations < 1:
            raise InvalidParameterError(
                f"Head/tail iteration cap must be at least 1, got {self.max_iterations}"
            )


@dataclass(frozen=True)
class Custom:
    """
    Caller-supplied bin edges.

    Use :meth:`parse` to build one from raw tokens; it sorts, deduplicates
    and validates the edges.
    """
    edges: Tuple[float, ...]
    include_nulls: bool = False
    name = None

    def __post_init__(self):
        edges = tuple(sorted({float(e) for e in self.edges}))
        if not all(math.isfinite(e) for e in edges):
            raise InvalidBinValueError(f"Bin edges must be finite, got {list(self.edges)}")
        if len(edges) < 2:
            raise InvalidNumberOfBinEdgesError(
                f"At least 2 distinct bin edges are required, got {len(edges)}"
            )
        object.__setattr__(self, 'edges', edges)

    @classmethod
    def parse(cls, tokens: Union[str, Sequence[Union[str, float]]]) -> 'Custom':
        """
        Parse custom edges from tokens.

        Args:
            tokens: A comma-separated string (``"60,80,100,null"``) or a
                sequence of tokens. The literal ``null`` (any case) requests
                a separate null bucket.

        Returns:
            Custom strategy with sorted, unique edges

        Example:
            >>> Custom.parse("90,50,110,70").edges
            (50.0, 70.0, 90.0, 110.0)
        """
        if isinstance(tokens, str):
            tokens = tokens.split(',')

        values = set()
        include_nulls = False
        for token in tokens:
            if isinstance(token, str):
                text = token.strip()
                if text.lower() == NULL_BIN_TOKEN:
                    include_nulls = True
                    continue
                try:
                    value = float(text)
                except ValueError:
                    raise InvalidBinValueError(
                        f"Invalid bin value: '{token}'. Use numeric values or '{NULL_BIN_TOKEN}'"
                    ) from None
            else:
                value = float(token)

            if not math.isfinite(value):
                raise InvalidBinValueError(
                    f"Invalid bin value: '{token}'. Bin edges must be finite"
                )
            values.add(value)

        return cls(edges=tuple(values), include_nulls=include_nulls)


Strategy = Union[EqualInterval, Quantile, Jenks, StandardDeviation, HeadTail, Custom]

_ALGORITHM_ALIASES = {
    'jenks': 'jenks',
    'quantile': 'quantile',
    'equal-interval': 'equal-interval',
    'equalinterval': 'equal-interval',
    'standard-deviation': 'standard-deviation',
    'standarddeviation': 'standard-deviation',
    'head-tail': 'head-tail',
    'headtail': 'head-tail',
}

ALGORITHM_NAMES = ('jenks', 'quantile', 'equal-interval', 'standard-deviation', 'head-tail')


def parse_algorithm(
    name: str,
    num_bins: int = DEFAULT_NUM_BINS,
    std_dev_size: float = DEFAULT_STD_DEV_SIZE
) -> Strategy:
    """
    Build a strategy from a CLI-style algorithm selector.

    Args:
        name: One of ``jenks``, ``quantile``, ``equal-interval``,
            ``standard-deviation``, ``head-tail`` (case-insensitive,
            underscores accepted)
        num_bins: Requested bin count (all algorithms except head/tail)
        std_dev_size: Standard deviation multiplier (StandardDeviation)

    Returns:
        The matching strategy instance
    """
    key = _ALGORITHM_ALIASES.get(str(name).strip().lower().replace('_', '-'))
    if key is None:
        raise InvalidAlgorithmNameError(
            f"Unknown algorithm '{name}'. Choose one of: {', '.join(ALGORITHM_NAMES)}"
        )

    if key == 'jenks':
        return Jenks(num_bins)
    if key == 'quantile':
        return Quantile(num_bins)
    if key == 'equal-interval':
        return EqualInterval(num_bins)
    if key == 'standard-deviation':
        return StandardDeviation(std_dev_size, num_bins)
    return HeadTail()


# ============================================================================
# Column Statistics
# ============================================================================

def _to_float_array(values: ColumnLike) -> np.ndarray:
    """Normalise a column to a float64 array where null becomes NaN."""
    if isinstance(values, (pa.Array, pa.ChunkedArray)):
        if isinstance(values, pa.ChunkedArray):
            values = values.combine_chunks()
        values = pc.cast(values, pa.float64(), safe=False)
        return values.to_numpy(zero_copy_only=False).astype(np.float64, copy=False)

    if isinstance(values, pd.Series):
        return pd.to_numeric(values, errors='coerce').to_numpy(dtype=np.float64, na_value=np.nan)

    if isinstance(values, np.ndarray) and values.dtype.kind in ('f', 'i', 'u'):
        return values.astype(np.float64)

    return np.array(
        [np.nan if v is None else v for v in values],
        dtype=np.float64
    )


@dataclass(frozen=True)
class ColumnStatistics:
    """
    Summary of a numeric column.

    Null and non-finite values are excluded from every statistic and from
    ``sorted_values`` but counted in ``null_values``. The sorted array is
    computed once and shared, read-only, by every strategy that needs
    ordering.
    """
    total_rows: int
    numeric_values: int
    null_values: int
    min: Optional[float]
    max: Optional[float]
    mean: Optional[float]
    std_dev: float
    sorted_values: np.ndarray = field(repr=False, compare=False)

    @classmethod
    def from_values(cls, values: ColumnLike, total_rows: Optional[int] = None) -> 'ColumnStatistics':
        """
        Compute statistics for a column.

        Args:
            values: Column values (None/NaN/inf are treated as nulls)
            total_rows: Row count of the source, when it differs from
                ``len(values)``; must be at least ``len(values)``

        Returns:
            ColumnStatistics for the column
        """
        array = _to_float_array(values)
        finite = array[np.isfinite(array)]
        if total_rows is None:
            total_rows = len(array)
        elif total_rows < len(array):
            raise InvalidParameterError(
                f"total_rows ({total_rows}) is smaller than the number of values ({len(array)})"
            )

        sorted_values = np.sort(finite, kind='stable')
        sorted_values.setflags(write=False)
        count = len(sorted_values)

        if count == 0:
            return cls(total_rows, 0, total_rows, None, None, None, 0.0, sorted_values)

        return cls(
            total_rows=total_rows,
            numeric_values=count,
            null_values=total_rows - count,
            min=float(sorted_values[0]),
            max=float(sorted_values[-1]),
            mean=float(sorted_values.mean()),
            std_dev=float(sorted_values.std(ddof=1)) if count > 1 else 0.0,
            sorted_values=sorted_values,
        )

    def require_numeric(self, algorithm: str = "binning"):
        """Raise EmptyNumericDataError when there is nothing to bin."""
        if self.numeric_values == 0:
            raise EmptyNumericDataError(
                f"No numeric values available for {algorithm}"
            )


# ============================================================================
# Boundary Computation
# ============================================================================

def _equal_interval_edges(strategy: EqualInterval, stats: ColumnStatistics) -> np.ndarray:
    # linspace keeps both endpoints exact and yields n+1 equal edges when min == max
    return np.linspace(stats.min, stats.max, strategy.num_bins + 1)


def _quantile_edges(strategy: Quantile, stats: ColumnStatistics) -> np.ndarray:
    probabilities = np.arange(strategy.num_bins + 1) / strategy.num_bins
    edges = np.quantile(stats.sorted_values, probabilities, method='linear')
    edges[0], edges[-1] = stats.min, stats.max
    # Ties at quantile boundaries produce repeated edges; collapse them
    keep = np.concatenate(([True], np.diff(edges) > 0))
    if keep.sum() < 2:
        return np.array([stats.min, stats.max])
    return edges[keep]


def _standard_deviation_edges(strategy: StandardDeviation, stats: ColumnStatistics) -> np.ndarray:
    if stats.std_dev == 0:
        return np.array([stats.min, stats.max])

    width = strategy.size * stats.std_dev
    reach = max(stats.max - stats.mean, stats.mean - stats.min)
    if width == 0 or reach / width > MAX_STD_DEV_BINS / 2:
        raise InvalidParameterError(
            f"Standard deviation size {strategy.size} would create more than "
            f"{MAX_STD_DEV_BINS:,} bins; use a larger size"
        )
    steps = max(math.ceil(reach / width), 1)

    edges = stats.mean + np.arange(-steps, steps + 1) * width
    if edges[0] > stats.min:
        edges[0] = stats.min
    if edges[-1] < stats.max:
        edges[-1] = stats.max
    return edges


def _head_tail_edges(strategy: HeadTail, stats: ColumnStatistics) -> np.ndarray:
    """
    Head/tail breaks as an explicit loop over the current head.

    Each level records the mean of the working set as a break and keeps the
    values strictly above it (the head). Splitting continues while the head
    is a minority of at most ``threshold`` of the working set and still has
    at least two distinct values.
    """
    working = stats.sorted_values
    breaks = []

    for level in range(strategy.max_iterations):
        mean = float(working.mean())
        if stats.min < mean < stats.max:
            breaks.append(mean)

        head = working[working > mean]
        if len(head) == 0 or head[0] == head[-1]:
            break
        share = len(head) / len(working)
        logger.debug(f"Head/tail level {level}: mean={mean:.6g}, head share={share:.3f}")
        if share > strategy.threshold:
            break
        working = head
    else:
        logger.warning(
            f"Head/tail breaks stopped at the iteration cap ({strategy.max_iterations})"
        )

    return np.array([stats.min] + breaks + [stats.max])


def _fisher_partition(values: np.ndarray, weights: np.ndarray, num_classes: int) -> List[int]:
    """
    Optimal 1-D partition of sorted distinct ``values`` into contiguous classes.

    Minimises the sum of within-class squared deviations. The cost of class
    ``values[i:j]`` is read in O(1) from prefix sums; each dynamic-programming
    layer is filled by divide and conquer over the optimal split index, which
    is monotone in ``j``. Values are centred on their weighted mean first so
    the prefix sums stay small for data far from zero (timestamps, IDs).

    Each divide-and-conquer node is one numpy call, so a layer costs
    O(m) Python-level steps; expect seconds for ~100k distinct values.

    Returns:
        Start index (into ``values``) of every class after the first
    """
    m = len(values)
    values = values - np.average(values, weights=weights)
    cum_w = np.concatenate(([0.0], np.cumsum(weights)))
    cum_s = np.concatenate(([0.0], np.cumsum(weights * values)))
    cum_q = np.concatenate(([0.0], np.cumsum(weights * values * values)))

    def cost(i, j):
        w = cum_w[j] - cum_w[i]
        s = cum_s[j] - cum_s[i]
        return (cum_q[j] - cum_q[i]) - s * s / w

    ends = np.arange(m + 1)
    previous = np.full(m + 1, np.inf)
    previous[1:] = cost(np.zeros(m, dtype=np.int64), ends[1:])
    splits = np.zeros((num_classes + 1, m + 1), dtype=np.int64)

    for k in range(2, num_classes + 1):
        current = np.full(m + 1, np.inf)
        # (lo, hi, opt_lo, opt_hi): fill current[lo..hi] with splits in [opt_lo, opt_hi]
        stack = [(k, m, k - 1, m - 1)]
        while stack:
            lo, hi, opt_lo, opt_hi = stack.pop()
            if lo > hi:
                continue
            mid = (lo + hi) // 2
            candidates = np.arange(max(opt_lo, k - 1), min(opt_hi, mid - 1) + 1)
            totals = previous[candidates] + cost(candidates, np.full(len(candidates), mid))
            best = int(np.argmin(totals))
            current[mid] = totals[best]
            split = int(candidates[best])
            splits[k, mid] = split
            stack.append((lo, mid - 1, opt_lo, split))
            stack.append((mid + 1, hi, split, opt_hi))
        previous = current

    starts = []
    end = m
    for k in range(num_classes, 1, -1):
        end = int(splits[k, end])
        starts.append(end)
    return starts[::-1]


def _jenks_edges(strategy: Jenks, stats: ColumnStatistics) -> np.ndarray:
    distinct, counts = np.unique(stats.sorted_values, return_counts=True)
    if strategy.num_bins > len(distinct):
        raise InvalidNumBinsError(
            f"Jenks cannot create {strategy.num_bins} classes from "
            f"{len(distinct)} distinct value(s)"
        )

    starts = np.asarray(
        _fisher_partition(distinct, counts.astype(np.float64), strategy.num_bins),
        dtype=np.int64
    )
    # Break halfway across the gap between adjacent classes
    breaks = (distinct[starts - 1] + distinct[starts]) / 2
    return np.concatenate(([stats.min], breaks, [stats.max]))


def _custom_edges(strategy: Custom, stats: ColumnStatistics) -> np.ndarray:
    return np.array(strategy.edges, dtype=np.float64)


_EDGE_FUNCTIONS = {
    EqualInterval: _equal_interval_edges,
    Quantile: _quantile_edges,
    StandardDeviation: _standard_deviation_edges,
    HeadTail: _head_tail_edges,
    Jenks: _jenks_edges,
    Custom: _custom_edges,
}


def compute_edges(strategy: Strategy, stats: ColumnStatistics) -> Tuple[float, ...]:
    """
    Compute bin edges for a strategy.

    Args:
        strategy: One of the strategy dataclasses
        stats: Statistics of the column being binned

    Returns:
        Ascending tuple of edges. Every algorithm starts at the column
        minimum and ends at the column maximum (StandardDeviation may
        extend past them to whole multiples of its width).
    """
    compute = _EDGE_FUNCTIONS.get(type(strategy))
    if compute is None:
        raise TypeError(f"Unsupported binning strategy: {type(strategy).__name__}")

    if not isinstance(strategy, Custom):
        stats.require_numeric(strategy.name)

    edges = tuple(float(e) for e in compute(strategy, stats))
    logger.info(f"{strategy.name or 'Custom'} edges: {list(edges)}")
    return edges


# ============================================================================
# Histogram Assignment
# ============================================================================

UNDERFLOW = 'underflow'
OVERFLOW = 'overflow'
NULL = 'null'
DATA = 'data'


@dataclass(frozen=True)
class Bucket:
    """Raw histogram bucket before labeling."""
    kind: str
    lower: Optional[float]
    upper: Optional[float]
    count: int
    min: Optional[float]
    max: Optional[float]


class HistogramBuilder:
    """
    Assigns every value of a column to exactly one bucket.

    Buckets are, in order: underflow, one data bin per pair of adjacent
    edges, overflow, and (when requested) null.

    Boundary rule:
    - ``v < edges[0]``                 -> underflow
    - ``edges[i] <= v < edges[i + 1]`` -> data bin i
    - ``v >= edges[-1]``               -> overflow

    Null and non-finite values are dropped unless ``include_null_bin`` is
    set, in which case they are counted in the null bucket only.
    """

    def __init__(self, include_null_bin: bool = False):
        self.include_null_bin = include_null_bin

    def build(
        self,
        edges: Sequence[float],
        values: ColumnLike,
        null_count: Optional[int] = None
    ) -> List[Bucket]:
        """
        Build buckets in a single vectorised pass.

        Args:
            edges: Ascending bin edges (at least 2)
            values: Column values, nulls allowed
            null_count: Null count of the source when it has more rows than
                ``values`` (defaults to the nulls found in ``values``)

        Returns:
            Ordered list of buckets
        """
        edges = np.asarray(edges, dtype=np.float64)
        if len(edges) < 2:
            raise InvalidNumberOfBinEdgesError(
                f"At least 2 bin edges are required, got {len(edges)}"
            )

        array = _to_float_array(values)
        finite_mask = np.isfinite(array)
        finite = array[finite_mask]

        # side='right' puts v == edges[i] into the bucket that starts at edges[i]
        slots = np.searchsorted(edges, finite, side='right')
        num_slots = len(edges) + 1
        counts = np.bincount(slots, minlength=num_slots)

        mins = np.full(num_slots, np.inf)
        maxs = np.full(num_slots, -np.inf)
        np.minimum.at(mins, slots, finite)
        np.maximum.at(maxs, slots, finite)

        buckets = []
        for slot in range(num_slots):
            if slot == 0:
                kind, lower, upper = UNDERFLOW, None, None
            elif slot == num_slots - 1:
                kind, lower, upper = OVERFLOW, None, None
            else:
                kind, lower, upper = DATA, float(edges[slot - 1]), float(edges[slot])

            count = int(counts[slot])
            buckets.append(Bucket(
                kind=kind,
                lower=lower,
                upper=upper,
                count=count,
                min=float(mins[slot]) if count else None,
                max=float(maxs[slot]) if count else None,
            ))

        if self.include_null_bin:
            if null_count is None:
                null_count = int(len(array) - len(finite))
            buckets.append(Bucket(NULL, None, None, null_count, None, None))

        logger.debug(
            f"Assigned {len(finite):,} values to {len(buckets)} buckets "
            f"(underflow={counts[0]}, overflow={counts[-1]})"
        )
        return buckets


# ============================================================================
# Result Assembly
# ============================================================================

@dataclass(frozen=True)
class Bin:
    """One labeled histogram bin."""
    label: str
    from_: Optional[float]
    to: Optional[float]
    count: int
    min: Optional[float]
    max: Optional[float]

    def to_dict(self) -> Dict:
        return {
            'bin_label': self.label,
            'from': self.from_,
            'to': self.to,
            'count': self.count,
            'min': self.min,
            'max': self.max,
        }


@dataclass(frozen=True)
class HistogramMetadata:
    file: str
    column: str
    algorithm: Optional[str]
    num_bins: Optional[int]
    std_dev_size: Optional[float]
    total_rows: int
    numeric_values: int
    null_values: int
    bin_edges: Tuple[float, ...]

    def to_dict(self) -> Dict:
        return {
            'file': self.file,
            'column': self.column,
            'algorithm': self.algorithm,
            'num_bins': self.num_bins,
            'std_dev_size': self.std_dev_size,
            'total_rows': self.total_rows,
            'numeric_values': self.numeric_values,
            'null_values': self.null_values,
            'bin_edges': list(self.bin_edges),
        }


@dataclass(frozen=True)
class HistogramResult:
    """Final histogram: column metadata plus the ordered bins."""
    metadata: HistogramMetadata
    bins: Tuple[Bin, ...]

    def to_dict(self) -> Dict:
        """Return the JSON-ready representation."""
        return {
            'metadata': self.metadata.to_dict(),
            'bins': [b.to_dict() for b in self.bins],
        }

    @property
    def data_bins(self) -> List[Bin]:
        return [b for b in self.bins if b.from_ is not None]

    def bin(self, label: str) -> Optional[Bin]:
        """Look up a bin by label (e.g. ``'overflow'``)."""
        for b in self.bins:
            if b.label == label:
                return b
        return None


class ResultAssembler:
    """Combines statistics, strategy parameters and buckets into a result."""

    def __init__(self, file: str = "", column: str = "", precision: int = LABEL_PRECISION):
        self.file = file
        self.column = column
        self.precision = precision

    def label(self, bucket: Bucket) -> str:
        if bucket.kind != DATA:
            return bucket.kind
        p = self.precision
        return f"[{bucket.lower:.{p}f}, {bucket.upper:.{p}f})"

    def assemble(
        self,
        strategy: Strategy,
        stats: ColumnStatistics,
        edges: Sequence[float],
        buckets: List[Bucket]
    ) -> HistogramResult:
        metadata = HistogramMetadata(
            file=self.file,
            column=self.column,
            algorithm=strategy.name,
            num_bins=int(strategy.num_bins) if hasattr(strategy, 'num_bins') else None,
            std_dev_size=float(strategy.size) if isinstance(strategy, StandardDeviation) else None,
            total_rows=stats.total_rows,
            numeric_values=stats.numeric_values,
            null_values=stats.null_values,
            bin_edges=tuple(float(e) for e in edges),
        )
        bins = tuple(
            Bin(
                label=self.label(b),
                from_=b.lower,
                to=b.upper,
                count=b.count,
                min=b.min,
                max=b.max,
            )
            for b in buckets
        )
        return HistogramResult(metadata=metadata, bins=bins)


# ============================================================================
# Column Loading
# ============================================================================

def _read_table(source: SourceLike, column: Optional[str] = None) -> pa.Table:
    """Load a source as a PyArrow Table, optionally restricted to one column."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise SourceNotFoundError(f"File not found: {source}")
        if column is not None:
            names = pq.read_schema(path).names
            if column not in names:
                raise ColumnNotFoundError(
                    f"Column '{column}' not found in {source}. "
                    f"Available columns: {', '.join(names)}"
                )
            return pq.read_table(path, columns=[column])
        return pq.read_table(path)

    elif isinstance(source, pd.DataFrame):
        table = pa.Table.from_pandas(source, preserve_index=False)

    elif isinstance(source, pa.Table):
        table = source

    else:
        raise TypeError(
            f"Source must be a Parquet file path, pandas DataFrame, or PyArrow Table. "
            f"Got: {type(source)}"
        )

    if column is not None and column not in table.column_names:
        raise ColumnNotFoundError(
            f"Column '{column}' not found. Available columns: {', '.join(table.column_names)}"
        )
    return table


def list_columns(source: SourceLike) -> List[str]:
    """
    List the column names of a source.

    For Parquet files only the schema is read.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise SourceNotFoundError(f"File not found: {source}")
        return list(pq.read_schema(path).names)
    return list(_read_table(source).column_names)


def load_column(source: SourceLike, column: str) -> Tuple[np.ndarray, int]:
    """
    Extract one column as float64 values (NaN for nulls).

    Integer, floating and decimal columns are cast to float64. Any other
    type is reported with a warning and treated as entirely null.

    Args:
        source: Parquet file path, pandas DataFrame, or PyArrow Table
        column: Column name

    Returns:
        (values, total_rows)
    """
    table = _read_table(source, column)
    col = table.column(column)
    col_type = col.type

    if pa.types.is_dictionary(col_type):
        col = col.cast(col_type.value_type)
        col_type = col.type

    if (pa.types.is_integer(col_type) or
            pa.types.is_floating(col_type) or
            pa.types.is_decimal(col_type)):
        values = _to_float_array(col)
    else:
        warnings.warn(
            f"Column '{column}' has non-numeric type {col_type}, treating values as null",
            UserWarning
        )
        values = np.full(table.num_rows, np.nan)

    return values, table.num_rows


# ============================================================================
# Public API
# ============================================================================

class Binner:
    """
    Histogram binner for a single numeric column.

    Runs the full pipeline: statistics, edges, bucket assignment and
    result assembly. Every call works on a fresh copy of the column, so
    one Binner can be reused across columns.

    Example:
        >>> binner = Binner(EqualInterval(5))
        >>> result = binner.bin(list(range(1, 11)))
        >>> [b.count for b in result.data_bins]
        [2, 2, 2, 2, 1]
    """

    def __init__(self, strategy: Strategy):
        if type(strategy) not in _EDGE_FUNCTIONS:
            raise TypeError(f"Unsupported binning strategy: {type(strategy).__name__}")
        self.strategy = strategy

    def bin(
        self,
        values: ColumnLike,
        file: str = "",
        column: str = "",
        total_rows: Optional[int] = None
    ) -> HistogramResult:
        """
        Bin a column of values.

        Args:
            values: Column values, nulls allowed
            file: Source name reported in the metadata
            column: Column name reported in the metadata
            total_rows: Source row count if it differs from ``len(values)``

        Returns:
            HistogramResult
        """
        array = _to_float_array(values)
        stats = ColumnStatistics.from_values(array, total_rows)
        logger.info(
            f"Column '{column}': {stats.total_rows:,} rows, "
            f"{stats.numeric_values:,} numeric, {stats.null_values:,} null"
        )

        edges = compute_edges(self.strategy, stats)

        include_nulls = isinstance(self.strategy, Custom) and self.strategy.include_nulls
        buckets = HistogramBuilder(include_null_bin=include_nulls).build(
            edges, array, null_count=stats.null_values
        )

        return ResultAssembler(file, column).assemble(self.strategy, stats, edges, buckets)

    def bin_source(self, source: SourceLike, column: str) -> HistogramResult:
        """Load ``column`` from a Parquet path, DataFrame or Table and bin it."""
        values, total_rows = load_column(source, column)
        file = str(source) if isinstance(source, (str, Path)) else ""
        return self.bin(values, file=file, column=column, total_rows=total_rows)


def bin_column(
    values: ColumnLike,
    strategy: Strategy,
    file: str = "",
    column: str = "",
    total_rows: Optional[int] = None
) -> HistogramResult:
    """
    Bin a column of values with the given strategy.

    Example:
        >>> result = bin_column([1, 2, 3, None, 50], HeadTail())
        >>> result.metadata.null_values
        1
    """
    return Binner(strategy).bin(values, file=file, column=column, total_rows=total_rows)


def bin_parquet(path: Union[str, Path], column: str, strategy: Strategy) -> HistogramResult:
    """
    Bin one column of a Parquet file.

    Example:
        >>> from binner import bin_parquet, Jenks
        >>> result = bin_parquet('athletes.parquet', 'weight', Jenks(5))
        >>> result.to_dict()['metadata']['bin_edges']
    """
    return Binner(strategy).bin_source(path, column)
