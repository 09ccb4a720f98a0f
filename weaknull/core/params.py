"""
Parameter bundles for the subject-level statistics.

Bundles are immutable and validated when built. They carry no randomness
and perform no I/O.
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Callable, Dict, Optional, Union


AUTO = "auto"

FoldCount = Union[int, str]


def _check_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{name} must be an integer. Got {type(value).__name__}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1. Got {value}")
    return int(value)


@dataclass(frozen=True)
class SignConsistencyParams:
    """
    Parameters of the sign-consistency statistic.

    Attributes:
        n_splits: Number of random half-splits averaged into the statistic
        max_resampling: Attempts allowed per split before it is dropped
        summary_function: Reduces the dv values of one subgroup to a scalar
    """

    n_splits: int
    max_resampling: int
    summary_function: Callable

    def __post_init__(self):
        object.__setattr__(self, "n_splits", _check_positive_int("n_splits", self.n_splits))
        object.__setattr__(
            self, "max_resampling", _check_positive_int("max_resampling", self.max_resampling)
        )
        if not callable(self.summary_function):
            raise TypeError("summary_function must be callable")


@dataclass(frozen=True)
class ClassificationParams:
    """
    Parameters of the classification-accuracy statistic.

    Attributes:
        K: Number of cross-validation folds, or "auto" for the size of the
            smallest label class
        handle_imbalance: Weight classes by min(count) / count when True
    """

    K: FoldCount = AUTO
    handle_imbalance: bool = True

    def __post_init__(self):
        if self.K is None:
            object.__setattr__(self, "K", AUTO)
        elif self.K != AUTO:
            k = _check_positive_int("K", self.K)
            if k < 2:
                raise ValueError(f"K must be >= 2 folds. Got {k}")
            object.__setattr__(self, "K", k)
        object.__setattr__(self, "handle_imbalance", bool(self.handle_imbalance))

    @property
    def is_auto(self) -> bool:
        return self.K == AUTO

    def resolve_k(self, label_counts: Dict) -> int:
        """Effective fold count for the given label counts."""
        if self.is_auto:
            return min(label_counts.values())
        return self.K


def create_sign_consistency_params(
    n_splits: int,
    max_resampling: int,
    summary_function: Callable
) -> SignConsistencyParams:
    """
    Build the parameters of the sign-consistency statistic.

    All arguments are required; there are no implicit defaults.

    Args:
        n_splits: Number of random splits used to estimate sign consistency
        max_resampling: Maximal number of consecutive invalid summary values
            before the split is ignored
        summary_function: Summary applied to the dv values under each split
            (e.g. ``np.mean``)

    Returns:
        SignConsistencyParams
    """
    return SignConsistencyParams(
        n_splits=n_splits,
        max_resampling=max_resampling,
        summary_function=summary_function
    )


def create_classification_params(
    K: Optional[FoldCount] = None,
    handle_imbalance: Optional[bool] = None
) -> ClassificationParams:
    """
    Build the parameters of the classification-accuracy statistic.

    Args:
        K: Number of folds. Defaults to "auto", the number of trials in the
            smallest label class.
        handle_imbalance: Whether to weight classes against imbalance.
            Defaults to True.

    Returns:
        ClassificationParams
    """
    if handle_imbalance is None:
        handle_imbalance = True
    return ClassificationParams(K=AUTO if K is None else K, handle_imbalance=handle_imbalance)
