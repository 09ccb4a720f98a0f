"""Shared fixtures for weaknull tests."""

import numpy as np
import pandas as pd
import pytest

from weaknull.core.config import set_config


def make_subject_df(
    seed,
    n_per_label=(20, 20),
    offsets=(1.0, 0.0),
    labels=("congruent", "incongruent"),
    noise=1.0,
    subject="s01",
    n_dv=1
):
    """Long-format trials of one subject, labels interleaved."""
    rng = np.random.default_rng(seed)
    rows = []
    for label, n, offset in zip(labels, n_per_label, offsets):
        values = offset + noise * rng.standard_normal((n, n_dv))
        for v in values:
            row = {"id": subject, "condition": label}
            if n_dv == 1:
                row["y"] = v[0]
            else:
                row.update({f"y{j}": v[j] for j in range(n_dv)})
            rows.append(row)
    df = pd.DataFrame(rows)
    # Keep the first row on labels[0] so it is the reference label
    order = np.concatenate([[0], 1 + rng.permutation(len(df) - 1)])
    return df.iloc[order].reset_index(drop=True)


@pytest.fixture
def subject_df():
    return make_subject_df(0)


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts from the environment defaults."""
    set_config(None)
    yield
    set_config(None)
