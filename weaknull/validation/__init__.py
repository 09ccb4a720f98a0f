"""Cross-validation splitters."""

from .folds import LabelBalancedKFold

__all__ = ["LabelBalancedKFold"]
