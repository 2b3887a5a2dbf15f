"""
Centralized settings and path configuration for the pricing engine.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass(frozen=True)
class FallbackPolicy:
    """Profit-per-unit heuristics used when cost-plus allocation degenerates."""

    # Rule 1: allocated profit is <= 0, NaN or infinite
    cost_plus_markup: float = 0.20
    cost_plus_flat: float = 5.0

    # Rule 2: the product itself has no expected units
    zero_unit_markup: float = 0.05
    zero_unit_flat: float = 1.0


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path
    sample_request: Path

    # Pricing behaviour
    price_decimals: int = 2
    percentage_total: float = 100.0
    fallback: FallbackPolicy = field(default_factory=FallbackPolicy)

    # Logging
    log_level: str = "INFO"

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        return cls(
            project_root=root,
            sample_request=root / 'src' / 'cost_pricing' / 'data' / 'sample_request.json',
            log_level=os.environ.get('COST_PRICING_LOG_LEVEL', 'INFO').upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
