"""Configuration dataclasses for healthquote."""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    return value if value else default


def _env_flag(key: str) -> bool:
    return (_env(key, "") or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class QuoteConfig:
    """Runtime configuration for quoting.

    Environment:
        HEALTHQUOTE_CATALOG: JSON catalog file (default: built-in catalog)
        HEALTHQUOTE_RESULTS_DIR: where exported quotes go (default: results)
        HEALTHQUOTE_CURRENCY: currency code shown next to prices (default: BRL)
        HEALTHQUOTE_DEBUG: "1"/"true" turns on debug logging
    """

    # None means the built-in reference catalog
    catalog_path: Optional[str] = field(default_factory=lambda: _env("HEALTHQUOTE_CATALOG"))
    results_dir: str = field(
        default_factory=lambda: _env("HEALTHQUOTE_RESULTS_DIR", "results") or "results"
    )

    # How many ranked plans the chat assistant gets to see
    advisor_top_n: int = 3

    currency: str = field(default_factory=lambda: _env("HEALTHQUOTE_CURRENCY", "BRL") or "BRL")
    debug: bool = field(default_factory=lambda: _env_flag("HEALTHQUOTE_DEBUG"))

    def validate(self) -> None:
        """Validate configuration."""
        if self.advisor_top_n < 1:
            raise ValueError("advisor_top_n must be at least 1")
        if not self.results_dir:
            raise ValueError("results_dir must not be empty")
        if not self.currency.strip():
            raise ValueError("currency must not be empty")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "catalog_path": self.catalog_path,
            "results_dir": self.results_dir,
            "advisor_top_n": self.advisor_top_n,
            "currency": self.currency,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuoteConfig":
        """Create from dictionary, falling back to defaults for missing keys."""
        config = cls()
        return cls(
            catalog_path=data.get("catalog_path", config.catalog_path),
            results_dir=data.get("results_dir", config.results_dir),
            advisor_top_n=data.get("advisor_top_n", config.advisor_top_n),
            currency=data.get("currency", config.currency),
            debug=data.get("debug", config.debug),
        )
