"""
Per-subject scoring of a long-format trial table.

Evaluates one statistic for every subject of a dataset, in parallel.
Label permutation and group-level aggregation are left to the caller.
"""

from numbers import Integral
from typing import Optional
import copy
import warnings

import pandas as pd
from joblib import Parallel, delayed

from .core.config import get_config
from .core.exceptions import find_stack_level
from .core.seeding import derive_seed
from .core.trials import ColumnNames, TrialTable
from .estimators.base import BaseStatistic


def _evaluate_subject(statistic: BaseStatistic, table: TrialTable, seed: Optional[int]):
    """
    Run a private copy of the statistic on one subject.

    Warnings are recorded and returned with the result, since worker
    processes cannot emit them to the caller.
    """
    subject_statistic = copy.deepcopy(statistic)
    if seed is not None:
        subject_statistic.random_state = seed

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = subject_statistic.evaluate(table)

    return result, [(str(w.message), w.category) for w in caught]


def _base_seed(statistic: BaseStatistic, random_state: Optional[int]) -> Optional[int]:
    """Seed from which subject seeds are derived."""
    if random_state is not None:
        return random_state
    own = statistic.random_state
    if isinstance(own, Integral) and not isinstance(own, bool):
        return int(own)
    return None


def score_subjects(
    data: pd.DataFrame,
    statistic: BaseStatistic,
    idv: str = "id",
    dv: ColumnNames = "y",
    iv: str = "condition",
    n_jobs: Optional[int] = None,
    random_state: Optional[int] = None,
    permutation_index: int = 0,
    verbose: Optional[bool] = None
) -> pd.DataFrame:
    """
    Evaluate a statistic for each subject.

    Each subject gets its own copy of the statistic, seeded from
    (random_state, subject index, permutation_index), so results do not
    depend on n_jobs or on scheduling order.

    Args:
        data: Long-format trials of all subjects
        statistic: SignConsistencyEstimator, ClassificationAccuracyEstimator
            or any other BaseStatistic
        idv: Subject identifier column
        dv: Dependent variable column(s)
        iv: Independent variable column
        n_jobs: Parallel jobs (default from the global config)
        random_state: Base seed; None falls back to the statistic's own
            integer seed, or leaves an unseeded statistic unseeded
        permutation_index: Index of the labelling being scored (0 for the
            observed labels), mixed into every subject's seed
        verbose: Report progress (default from the global config)

    Returns:
        DataFrame with one row per subject: idv, statistic, is_defined and
        the result's diagnostics

    Example:
        >>> scores = score_subjects(df, SignConsistencyEstimator(200, 50, np.mean),
        ...                         idv="id", dv="rt", iv="condition", random_state=1)
        >>> scores["statistic"].mean()
    """
    config = get_config()
    n_jobs = config.n_jobs if n_jobs is None else n_jobs
    verbose = config.verbose if verbose is None else verbose

    if idv not in data.columns:
        raise KeyError(f"Subject column {idv!r} not found in trial data")

    tables = [
        TrialTable.from_dataframe(subject_df, idv=idv, dv=dv, iv=iv)
        for _, subject_df in data.groupby(idv, sort=True)
    ]

    if verbose:
        print(f"Scoring {len(tables)} subjects with {statistic!r}...")

    base_seed = _base_seed(statistic, random_state)
    outputs = Parallel(n_jobs=n_jobs, verbose=10 if verbose else 0)(
        delayed(_evaluate_subject)(
            statistic, table, derive_seed(base_seed, i, permutation_index)
        )
        for i, table in enumerate(tables)
    )

    rows = []
    for result, caught in outputs:
        for message, category in caught:
            warnings.warn(
                f"Subject {result.subject}: {message}", category,
                stacklevel=find_stack_level()
            )
        row = {idv: result.subject}
        row.update({k: v for k, v in result.to_dict().items()
                    if k not in ("subject", "metadata") and not isinstance(v, (dict, list))})
        row["is_defined"] = result.is_defined
        rows.append(row)

    return pd.DataFrame(rows)
