"""
Sign-consistency statistic.

Estimates how reliably the direction of a subject's effect replicates
within their own data: trials are split at random into two halves, the
difference between the reference condition and the other condition is
summarised in each half, and the split scores 1 when both differences
have the same sign. The statistic is the mean over many splits.

Because only agreement of direction is scored, subjects whose effects
point in opposite directions all contribute evidence against the null,
even when their effects cancel in a group mean.
"""

from typing import Callable, Optional, Tuple, Union
import warnings

import numpy as np
import pandas as pd

from .base import BaseStatistic
from ..core.exceptions import (
    ResamplingExhaustedWarning,
    UndefinedStatisticWarning,
    find_stack_level
)
from ..core.params import SignConsistencyParams
from ..core.results import SignConsistencyResult
from ..core.seeding import RandomState
from ..core.trials import ColumnNames, TrialTable


class SignConsistencyEstimator(BaseStatistic):
    """
    Mean sign agreement across repeated random half-splits.

    Args:
        n_splits: Number of random splits
        max_resampling: Draws allowed per split before it is dropped
        summary_function: Reduces the dv values of a subgroup to a scalar.
            Receives a vector for a single dv and a (trials, dv) matrix
            for several.
        random_state: Seed for the per-call generator

    Example:
        >>> estimator = SignConsistencyEstimator(
        ...     n_splits=500, max_resampling=100, summary_function=np.mean,
        ...     random_state=0
        ... )
        >>> estimator.estimate(df, idv="id", dv="rt", iv="condition")
        0.93
    """

    def __init__(
        self,
        n_splits: int,
        max_resampling: int,
        summary_function: Callable,
        random_state: RandomState = None
    ):
        super().__init__(random_state=random_state)
        # Validates the arguments
        params = SignConsistencyParams(n_splits, max_resampling, summary_function)
        self.n_splits = params.n_splits
        self.max_resampling = params.max_resampling
        self.summary_function = params.summary_function

    @classmethod
    def from_params(
        cls,
        params: SignConsistencyParams,
        random_state: RandomState = None
    ) -> "SignConsistencyEstimator":
        return cls(
            n_splits=params.n_splits,
            max_resampling=params.max_resampling,
            summary_function=params.summary_function,
            random_state=random_state
        )

    def compute(self, X: np.ndarray, labels: np.ndarray) -> SignConsistencyResult:
        """
        Compute sign consistency from arrays.

        Args:
            X: Dependent variable(s) (n_trials,) or (n_trials, n_dv)
            labels: Condition labels; the first label is the reference

        Returns:
            SignConsistencyResult, statistic NaN when no split was valid
        """
        X, labels = self._check_arrays(X, labels)
        if X.shape[1] == 1:
            X = X[:, 0]

        if len(labels) == 0:
            reference = np.zeros(0, dtype=bool)
        else:
            reference = labels == labels[0]

        rng = self._rng()
        outcomes = np.full(self.n_splits, np.nan)
        attempts = np.zeros(self.n_splits, dtype=int)

        for split in range(self.n_splits):
            consistent, attempts[split] = self._resolve_split(X, reference, rng)
            if consistent is None:
                warnings.warn(
                    f"Split {split}: reached max resampling (={self.max_resampling}). "
                    "Check that the data includes enough trials under all levels "
                    "of the independent variable",
                    ResamplingExhaustedWarning,
                    stacklevel=find_stack_level()
                )
            else:
                outcomes[split] = float(consistent)

        valid = ~np.isnan(outcomes)
        if valid.any():
            statistic = float(np.mean(outcomes[valid]))
        else:
            warnings.warn(
                "No split produced a valid sign comparison; sign consistency is undefined",
                UndefinedStatisticWarning,
                stacklevel=find_stack_level()
            )
            statistic = float("nan")

        return SignConsistencyResult(
            statistic=statistic,
            split_outcomes=outcomes,
            attempts=attempts,
            metadata={
                "n_trials": len(labels),
                "max_resampling": self.max_resampling,
                "summary_function": getattr(
                    self.summary_function, "__name__", repr(self.summary_function)
                )
            }
        )

    def _resolve_split(
        self,
        X: np.ndarray,
        reference: np.ndarray,
        rng: np.random.Generator
    ) -> Tuple[Optional[bool], int]:
        """Draw until a split is valid or the budget runs out."""
        for attempt in range(1, self.max_resampling + 1):
            consistent = self._draw_split(X, reference, rng)
            if consistent is not None:
                return consistent, attempt
        return None, self.max_resampling

    def _draw_split(
        self,
        X: np.ndarray,
        reference: np.ndarray,
        rng: np.random.Generator
    ) -> Optional[bool]:
        """
        One random half-split.

        Trials whose rank in a random permutation is below round(n / 2)
        form the first half. Returns whether the two halves agree in sign,
        or None when either sign is undefined.
        """
        n_trials = len(reference)
        midpoint = round(n_trials / 2)
        second_half = rng.permutation(n_trials) >= midpoint

        sign_a = self._difference_sign(X, reference, ~second_half)
        sign_b = self._difference_sign(X, reference, second_half)

        if np.isnan(sign_a) or np.isnan(sign_b):
            return None
        return bool(sign_a == sign_b)

    def _difference_sign(
        self,
        X: np.ndarray,
        reference: np.ndarray,
        half: np.ndarray
    ) -> float:
        in_reference = half & reference
        in_other = half & ~reference
        # An empty subgroup has no summary
        if not in_reference.any() or not in_other.any():
            return float("nan")

        reference_summary = self.summary_function(X[in_reference])
        other_summary = self.summary_function(X[in_other])
        # None counts as an undefined summary, like NaN
        if reference_summary is None or other_summary is None:
            return float("nan")

        return float(np.sign(float(reference_summary) - float(other_summary)))

    def __repr__(self) -> str:
        name = getattr(self.summary_function, "__name__", "summary_function")
        return (f"SignConsistencyEstimator(n_splits={self.n_splits}, "
                f"max_resampling={self.max_resampling}, summary_function={name})")


def calculate_sign_consistency(
    data: Union[TrialTable, pd.DataFrame],
    idv: str = "id",
    dv: ColumnNames = "y",
    iv: str = "condition",
    params: SignConsistencyParams = None,
    random_state: RandomState = None
) -> float:
    """
    Sign consistency of one subject's trials.

    Args:
        data: Trials of one subject
        idv: Subject identifier column
        dv: Dependent variable column(s) passed to the summary function
        iv: Independent variable column; its first value is the reference
        params: Bundle from create_sign_consistency_params()
        random_state: Seed for the random splits

    Returns:
        Mean consistency of signs across valid splits, NaN if none was valid
    """
    if params is None:
        raise ValueError("params is required; see create_sign_consistency_params()")
    estimator = SignConsistencyEstimator.from_params(params, random_state=random_state)
    return estimator.estimate(data, idv=idv, dv=dv, iv=iv)
