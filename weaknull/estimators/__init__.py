"""Subject-level statistics."""

from .base import BaseStatistic
from .sign_consistency import SignConsistencyEstimator, calculate_sign_consistency
from .classification import (
    ClassificationAccuracyEstimator,
    class_weights,
    classify_conditions,
    get_classifier_accuracy
)

__all__ = [
    "BaseStatistic",
    "SignConsistencyEstimator",
    "calculate_sign_consistency",
    "ClassificationAccuracyEstimator",
    "class_weights",
    "classify_conditions",
    "get_classifier_accuracy",
]
