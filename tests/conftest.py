import numpy as np
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import pytest


NUM_ATHLETES = 1000
NUM_MISSING_WEIGHTS = 25


@pytest.fixture
def athletes_df():
    """Athlete measurements with some missing weights."""
    rng = np.random.default_rng(42)
    weight = np.round(rng.normal(75, 12, NUM_ATHLETES), 1)
    weight[rng.choice(NUM_ATHLETES, NUM_MISSING_WEIGHTS, replace=False)] = np.nan
    return pd.DataFrame({
        'name': [f"athlete_{i}" for i in range(NUM_ATHLETES)],
        'weight': weight,
        'height': np.round(rng.normal(178, 9, NUM_ATHLETES)),
        'medals': rng.integers(0, 5, NUM_ATHLETES),
    })


@pytest.fixture
def athletes_parquet(tmp_path, athletes_df):
    path = tmp_path / "athletes.parquet"
    pq.write_table(pa.Table.from_pandas(athletes_df, preserve_index=False), path)
    return path


@pytest.fixture
def skewed_values():
    """Heavy-tailed sample (Pareto)."""
    rng = np.random.default_rng(7)
    return (rng.pareto(1.5, 2000) + 1) * 10


@pytest.fixture
def one_to_ten():
    return [float(v) for v in range(1, 11)]
