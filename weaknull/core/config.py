"""
WeakNullConfig - Configuration settings for subject-level statistics.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional
import os
import json


@dataclass
class ClassifierConfig:
    """Configuration for the linear SVM used by the classification statistic."""

    svm_C: float = 1.0
    standardize: bool = True
    max_iter: int = -1
    tol: float = 1e-3


@dataclass
class WeakNullConfig:
    """
    Global defaults picked up when an estimator is constructed.

    Example:
        >>> config = WeakNullConfig.from_env()
        >>> config.classifier.svm_C = 0.1
        >>> config.save("weaknull.json")
    """

    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)

    random_state: Optional[int] = None
    n_jobs: int = 1
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "WeakNullConfig":
        """Load configuration from environment variables."""
        random_state = os.getenv("WEAKNULL_RANDOM_STATE")
        return cls(
            classifier=ClassifierConfig(
                svm_C=float(os.getenv("WEAKNULL_SVM_C", "1.0"))
            ),
            random_state=int(random_state) if random_state else None,
            n_jobs=int(os.getenv("WEAKNULL_N_JOBS", "1")),
            verbose=os.getenv("WEAKNULL_VERBOSE", "0").lower() in ("1", "true", "yes")
        )

    @classmethod
    def from_file(cls, path: str) -> "WeakNullConfig":
        """Load configuration from JSON file."""
        with open(path) as f:
            data = json.load(f)

        config = cls()

        if "classifier" in data:
            config.classifier = ClassifierConfig(**data["classifier"])

        for key in ["random_state", "n_jobs", "verbose"]:
            if key in data:
                setattr(config, key, data[key])

        return config

    def save(self, path: str):
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)


# Global config instance
_config: Optional[WeakNullConfig] = None


def get_config() -> WeakNullConfig:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = WeakNullConfig.from_env()
    return _config


def set_config(config: Optional[WeakNullConfig]):
    """Set global configuration instance (None reloads from the environment)."""
    global _config
    _config = config
