"""
Subject-level statistics for testing weak null hypotheses

Per-subject test statistics for permutation-based tests of "weak" null
hypotheses in repeated-measures experiments: hypotheses that can be
rejected even when individual effects point in different directions and
cancel in the group mean.

Example:
    >>> import numpy as np
    >>> from weaknull import create_sign_consistency_params, calculate_sign_consistency
    >>>
    >>> params = create_sign_consistency_params(
    ...     n_splits=500, max_resampling=100, summary_function=np.mean
    ... )
    >>> score = calculate_sign_consistency(subject_df, "id", "rt", "condition", params)
"""

__version__ = "0.1.0"

# Core data structures
from .core import (
    TrialTable,
    AUTO,
    SignConsistencyParams,
    ClassificationParams,
    create_sign_consistency_params,
    create_classification_params,
    StatisticResult,
    SignConsistencyResult,
    ClassificationResult,
    WeakNullConfig,
    get_config,
    set_config,
    DimensionMismatch,
    DegenerateFold,
    ResamplingExhaustedWarning,
    UndefinedStatisticWarning,
    derive_seed,
    spawn_seeds
)

# Statistics
from .estimators import (
    BaseStatistic,
    SignConsistencyEstimator,
    ClassificationAccuracyEstimator,
    calculate_sign_consistency,
    classify_conditions,
    get_classifier_accuracy,
    class_weights
)

# Validation
from .validation import LabelBalancedKFold

from .scoring import score_subjects

__all__ = [
    # Core
    "TrialTable",
    "AUTO",
    "SignConsistencyParams",
    "ClassificationParams",
    "create_sign_consistency_params",
    "create_classification_params",
    "StatisticResult",
    "SignConsistencyResult",
    "ClassificationResult",
    "WeakNullConfig",
    "get_config",
    "set_config",
    "DimensionMismatch",
    "DegenerateFold",
    "ResamplingExhaustedWarning",
    "UndefinedStatisticWarning",
    "derive_seed",
    "spawn_seeds",
    # Statistics
    "BaseStatistic",
    "SignConsistencyEstimator",
    "ClassificationAccuracyEstimator",
    "calculate_sign_consistency",
    "classify_conditions",
    "get_classifier_accuracy",
    "class_weights",
    # Validation
    "LabelBalancedKFold",
    # Scoring
    "score_subjects",
]
