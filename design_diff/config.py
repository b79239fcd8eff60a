"""Comparison engine configuration.

Loads and validates design-diff.config.json configuration files. Every
threshold has a documented default so the engine runs without a file.
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .diff_logging import get_logger

logger = get_logger()

# Default configuration file name
CONFIG_FILENAME = "design-diff.config.json"

# Environment variable pointing at an explicit config file
CONFIG_ENV_VAR = "DESIGN_DIFF_CONFIG"


class ComparisonConfig(BaseModel):
    """Thresholds and tolerances used by every comparison stage."""

    # Color matching (Delta E units)
    color_threshold: float = Field(default=10.0, gt=0)
    color_pairing_limit: float = Field(default=50.0, gt=0)

    # Typography matching (composite score 0-1)
    typography_threshold: float = Field(default=0.7, ge=0, le=1)
    typography_pairing_floor: float = Field(default=0.4, ge=0, le=1)
    typography_generic_family_bonus: float = Field(default=0.15, ge=0, le=1)
    font_size_tolerance: float = Field(default=2.0, ge=0)
    font_size_spread: float = Field(default=10.0, gt=0)

    # Structural matching (similarity 0-1)
    structural_threshold: float = Field(default=0.7, ge=0, le=1)

    # Spacing and border radius (pixels)
    spacing_tolerance: float = Field(default=2.0, ge=0)
    numeric_pairing_max_relative_delta: float = Field(default=0.5, ge=0, le=1)

    # Shadows
    shadow_elevation_levels: list[float] = Field(
        default_factory=lambda: [2.0, 6.0, 12.0, 24.0]
    )
    shadow_level_tolerance: int = Field(default=0, ge=0)

    # Normalization
    base_font_size: float = Field(default=16.0, gt=0)
    include_transparent_backgrounds: bool = Field(default=False)

    # Discrepancy priority boost
    priority_boost_subtypes: list[str] = Field(
        default_factory=lambda: ["buttons", "inputs", "links", "ctas", "navigation"]
    )

    @field_validator("typography_pairing_floor")
    @classmethod
    def floor_below_threshold(cls, v: float, info: ValidationInfo) -> float:
        """The pairing floor may not exceed the accept threshold."""
        threshold = info.data.get("typography_threshold", 0.7)
        if v > threshold:
            raise ValueError(
                f"typography_pairing_floor ({v}) exceeds typography_threshold ({threshold})"
            )
        return v

    @field_validator("shadow_elevation_levels")
    @classmethod
    def levels_ascending(cls, v: list[float]) -> list[float]:
        """Elevation boundaries must be positive and strictly ascending."""
        if any(level <= 0 for level in v):
            raise ValueError("shadow_elevation_levels must be positive")
        if any(b <= a for a, b in zip(v, v[1:], strict=False)):
            raise ValueError("shadow_elevation_levels must be strictly ascending")
        return v

    @field_validator("priority_boost_subtypes")
    @classmethod
    def lowercase_subtypes(cls, v: list[str]) -> list[str]:
        """Normalize boost subtypes for case-insensitive lookup."""
        return [s.strip().lower() for s in v if s.strip()]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComparisonConfig":
        """Create from dictionary."""
        return cls.model_validate(data)


class ConfigLoader:
    """Loader for comparison configuration."""

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root. Defaults to current directory.
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()

    def load(self, config_path: Path | None = None) -> ComparisonConfig:
        """Load comparison configuration.

        Precedence (highest to lowest):
        1. Explicit config_path
        2. Environment variable DESIGN_DIFF_CONFIG
        3. design-diff.config.json in project root
        4. Default configuration

        Raises:
            json.JSONDecodeError: If the file is not valid JSON.
            pydantic.ValidationError: If a value is out of range.
        """
        if config_path and config_path.exists():
            return self._load_from_file(config_path)

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            env_config_path = Path(env_path)
            if env_config_path.exists():
                return self._load_from_file(env_config_path)
            logger.warning(f"{CONFIG_ENV_VAR} points at missing file: {env_path}")

        project_config = self.project_path / CONFIG_FILENAME
        if project_config.exists():
            return self._load_from_file(project_config)

        logger.debug("No comparison config found, using defaults")
        return ComparisonConfig()

    def _load_from_file(self, config_path: Path) -> ComparisonConfig:
        logger.debug(f"Loading comparison config from {config_path}")
        content = config_path.read_text(encoding="utf-8")
        return ComparisonConfig.from_dict(json.loads(content))

    def save(self, config: ComparisonConfig, config_path: Path | None = None) -> Path:
        """Save configuration to a file.

        Returns:
            Path where config was saved.
        """
        if config_path is None:
            config_path = self.project_path / CONFIG_FILENAME

        content = json.dumps(config.to_dict(), indent=2)
        config_path.write_text(content, encoding="utf-8")
        logger.info(f"Saved comparison config to {config_path}")
        return config_path


def load_config(project_path: Path | None = None) -> ComparisonConfig:
    """Convenience function to load comparison configuration."""
    return ConfigLoader(project_path).load()
