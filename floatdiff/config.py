"""
Configuration schemas for YAML-described comparison groups.

Provides type-safe, validated configuration classes using dataclasses.
A config names a group of summaries, each with its own tolerance, sign
policy and metric, sharing one histogram bucket cap.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from pathlib import Path
import yaml

from .core.histogram import MIN_DISPLAY_BUCKETS
from .core.summary import DEFAULT_BUCKET_COUNT
from .metrics.core import available_metrics

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class MetricConfig:
    """Difference metric configuration."""
    kind: str = "abs"
    range_min: Optional[float] = None
    range_max: Optional[float] = None

    def __post_init__(self):
        """Validate metric configuration."""
        self.kind = self.kind.lower()
        valid_kind = set(available_metrics())
        if self.kind not in valid_kind:
            raise ValueError(f"kind must be one of {sorted(valid_kind)}, got {self.kind}")
        if self.range_min is not None:
            self.range_min = float(self.range_min)
        if self.range_max is not None:
            self.range_max = float(self.range_max)

        if self.kind == "cyclic":
            if self.range_min is None or self.range_max is None:
                raise ValueError("cyclic metric requires range_min and range_max")
            if not self.range_min < self.range_max:
                raise ValueError(
                    f"range_min must be less than range_max, got [{self.range_min}, {self.range_max}]"
                )
            if not (self.range_min <= 0.0 <= self.range_max):
                raise ValueError(
                    f"0.0 must fall within [range_min, range_max], got [{self.range_min}, {self.range_max}]"
                )
        elif self.range_min is not None or self.range_max is not None:
            raise ValueError(f"{self.kind} metric does not take a range")


@dataclass
class SummaryConfig:
    """One measurement compared within a group."""
    name: str
    tolerance: float = 0.0
    allow_sign: bool = False
    metric: MetricConfig = field(default_factory=MetricConfig)

    def __post_init__(self):
        """Validate summary configuration."""
        if self.name is None:
            raise ValueError("Summary name is required")
        # YAML 1.1 reads 1e-9 (no dot) as a string
        self.tolerance = float(self.tolerance)
        if math.isnan(self.tolerance) or self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}")
        if isinstance(self.metric, str):
            self.metric = MetricConfig(kind=self.metric)
        elif isinstance(self.metric, dict):
            self.metric = MetricConfig(**self.metric)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"

    def __post_init__(self):
        """Validate logging configuration."""
        self.level = self.level.upper()
        if self.level not in _LEVELS:
            raise ValueError(f"level must be one of {sorted(_LEVELS)}, got {self.level}")

    def apply(self, logger_name: str = "floatdiff") -> None:
        """Set the level of the package logger."""
        logging.getLogger(logger_name).setLevel(self.level)


@dataclass
class ComparisonConfig:
    """Complete comparison group configuration."""
    summaries: List[SummaryConfig]
    group: str = ""
    bucket_count: int = DEFAULT_BUCKET_COUNT
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Validate comparison configuration."""
        if self.bucket_count < MIN_DISPLAY_BUCKETS:
            raise ValueError(f"bucket_count must be >= {MIN_DISPLAY_BUCKETS}, got {self.bucket_count}")
        names = [s.name for s in self.summaries]
        if len(set(names)) != len(names):
            raise ValueError(f"Summary names must be unique, got {names}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ComparisonConfig:
        """Create ComparisonConfig from dictionary (e.g., from YAML)."""
        return cls(
            summaries=[SummaryConfig(**s) for s in data['summaries']],
            group=data.get('group', ""),
            bucket_count=data.get('bucket_count', DEFAULT_BUCKET_COUNT),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> ComparisonConfig:
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or 'summaries' not in data:
            raise ValueError("Missing required section: summaries")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        from dataclasses import asdict
        return asdict(self)

    def to_yaml(self, yaml_path: str | Path) -> None:
        """Write configuration to a YAML file."""
        with open(yaml_path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
