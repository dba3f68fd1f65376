"""
Engine Configuration
====================
Hyperparameters for the adaptive engine, loadable from config.yaml
"""

from dataclasses import asdict, dataclass, fields
from typing import Optional

import yaml

from adaptive_predictor.errors import InvalidConfigError


# camelCase aliases accepted in config files
KEY_ALIASES = {
    'learningRate': 'learning_rate',
    'bufferCapacity': 'buffer_capacity',
    'maxTrainingData': 'buffer_capacity',
    'minSamplesToTrain': 'min_samples_to_train',
    'trainFireProbability': 'train_fire_probability',
    'batchSize': 'batch_size',
    'accuracyScale': 'accuracy_scale',
    'historySize': 'history_size',
}


@dataclass
class EngineConfig:
    learning_rate: float = 0.1
    momentum: float = 0.9
    buffer_capacity: int = 100
    min_samples_to_train: int = 10
    train_fire_probability: float = 0.1
    batch_size: int = 10
    accuracy_scale: float = 200.0
    history_size: int = 1000
    seed: Optional[int] = None
    verbose: bool = False

    @classmethod
    def from_dict(cls, values: Optional[dict]) -> "EngineConfig":
        """
        Build a config from a mapping

        Args:
            values: snake_case or camelCase keys; missing keys keep defaults

        Returns:
            Validated EngineConfig
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (values or {}).items():
            name = KEY_ALIASES.get(key, key)
            if name not in known:
                raise InvalidConfigError(f"Unknown config key: {key}")
            kwargs[name] = value

        config = cls(**kwargs)
        config.validate()
        return config

    @classmethod
    def from_yaml(cls, config_path: str = "config.yaml", section: str = "engine") -> "EngineConfig":
        """Load the named section of a YAML config file"""
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        return cls.from_dict(config.get(section, {}))

    def validate(self):
        """Raise InvalidConfigError on the first out-of-range value"""
        def _is_int(value):
            return isinstance(value, int) and not isinstance(value, bool)

        def _is_number(value):
            # YAML 1.1 reads "1e-3" as a string
            return isinstance(value, (int, float)) and not isinstance(value, bool)

        for name in ('learning_rate', 'momentum', 'train_fire_probability', 'accuracy_scale'):
            value = getattr(self, name)
            if not _is_number(value):
                raise InvalidConfigError(f"{name} must be a number, got {value!r}")

        if not self.learning_rate > 0:
            raise InvalidConfigError(f"learning_rate must be > 0, got {self.learning_rate}")
        if not 0 <= self.momentum < 1:
            raise InvalidConfigError(f"momentum must be in [0, 1), got {self.momentum}")
        if not _is_int(self.buffer_capacity) or self.buffer_capacity < 1:
            raise InvalidConfigError(f"buffer_capacity must be an int >= 1, got {self.buffer_capacity}")
        if not _is_int(self.min_samples_to_train) or self.min_samples_to_train < 0:
            raise InvalidConfigError(
                f"min_samples_to_train must be an int >= 0, got {self.min_samples_to_train}"
            )
        if not 0 <= self.train_fire_probability <= 1:
            raise InvalidConfigError(
                f"train_fire_probability must be in [0, 1], got {self.train_fire_probability}"
            )
        if not _is_int(self.batch_size) or self.batch_size < 1:
            raise InvalidConfigError(f"batch_size must be an int >= 1, got {self.batch_size}")
        if not self.accuracy_scale > 0:
            raise InvalidConfigError(f"accuracy_scale must be > 0, got {self.accuracy_scale}")
        if not _is_int(self.history_size) or self.history_size < 1:
            raise InvalidConfigError(f"history_size must be an int >= 1, got {self.history_size}")
        if self.seed is not None and not _is_int(self.seed):
            raise InvalidConfigError(f"seed must be an int or null, got {self.seed!r}")

    def to_dict(self) -> dict:
        return asdict(self)
