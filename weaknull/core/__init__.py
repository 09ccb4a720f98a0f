"""Core data models for subject-level statistics."""

from .trials import TrialTable, as_trial_table
from .params import (
    AUTO,
    SignConsistencyParams,
    ClassificationParams,
    create_sign_consistency_params,
    create_classification_params
)
from .results import StatisticResult, SignConsistencyResult, ClassificationResult
from .config import WeakNullConfig, ClassifierConfig, get_config, set_config
from .exceptions import (
    DimensionMismatch,
    DegenerateFold,
    ResamplingExhaustedWarning,
    UndefinedStatisticWarning
)
from .seeding import make_rng, spawn_seeds, derive_seed

__all__ = [
    "TrialTable",
    "as_trial_table",
    "AUTO",
    "SignConsistencyParams",
    "ClassificationParams",
    "create_sign_consistency_params",
    "create_classification_params",
    "StatisticResult",
    "SignConsistencyResult",
    "ClassificationResult",
    "WeakNullConfig",
    "ClassifierConfig",
    "get_config",
    "set_config",
    "DimensionMismatch",
    "DegenerateFold",
    "ResamplingExhaustedWarning",
    "UndefinedStatisticWarning",
    "make_rng",
    "spawn_seeds",
    "derive_seed",
]
