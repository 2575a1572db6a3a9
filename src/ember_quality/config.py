"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

CONFIG_ENV_VAR = "EMBER_CONFIG"


@dataclass(frozen=True)
class ScoringConfig:
    verified_threshold: int = 90
    confident_threshold: int = 75

    def __post_init__(self) -> None:
        if not 0 <= self.confident_threshold <= self.verified_threshold <= 100:
            raise ValueError(
                "scoring thresholds must satisfy 0 <= confident_threshold "
                f"<= verified_threshold <= 100, got {self.confident_threshold}/{self.verified_threshold}"
            )


@dataclass(frozen=True)
class ValidationConfig:
    tolerance: float = 1e-4
    max_batch_size: int = 100
    computational_subject: str = "Mathematics"

    def __post_init__(self) -> None:
        if not 0 < self.tolerance < 1:
            raise ValueError(f"tolerance must be between 0 and 1, got {self.tolerance}")
        if not 1 <= self.max_batch_size <= 1000:
            raise ValueError(f"max_batch_size must be between 1 and 1000, got {self.max_batch_size}")


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = "~/.ember-quality/results.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    store: StoreConfig = field(default_factory=StoreConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    Without an explicit path, $EMBER_CONFIG is tried, then config.yaml in
    the working directory.
    """
    if path is None:
        candidates = [Path.cwd() / "config.yaml"]
        if os.environ.get(CONFIG_ENV_VAR):
            candidates.insert(0, Path(os.environ[CONFIG_ENV_VAR]).expanduser())
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        scoring=ScoringConfig(**raw.get("scoring", {})),
        validation=ValidationConfig(**raw.get("validation", {})),
        store=StoreConfig(**raw.get("store", {})),
    )
