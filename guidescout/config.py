"""
Configuration system for GuideScout.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class DesignConfig(BaseModel):
    """Analysis defaults and bounds, set through GUIDESCOUT_DESIGN__*."""
    # Guide search
    default_cas_system: str = "SpCas9 (S. pyogenes, Type II)"
    default_guide_length: int = 20
    min_guide_length: int = 18
    max_guide_length: int = 24

    # Scoring
    advanced_scores: bool = True
    self_comp_window: int = 4
    max_mismatches: int = 5

    # Off-target-like scan is O(n^2); warn above this many bases
    offtarget_warn_length: int = 10000

    # GC% filter applied to the ranked table
    gc_min: float = 30.0
    gc_max: float = 80.0

    # Sequence map
    context_flank: int = 12
    map_top_n: int = 10
    map_max_guides: int = 50
    chars_per_line: int = 70

    @model_validator(mode="after")
    def check_bounds(self) -> "DesignConfig":
        if self.min_guide_length > self.max_guide_length:
            raise ValueError("min_guide_length must not exceed max_guide_length")
        if self.gc_min > self.gc_max:
            raise ValueError("gc_min must not exceed gc_max")
        return self


class ApiConfig(BaseModel):
    """Web API configuration, set through GUIDESCOUT_API__*."""
    host: str = "127.0.0.1"
    port: int = 8000
    max_sequence_length: int = 50000


class GuideScoutConfig(BaseSettings):
    """Main configuration for GuideScout."""

    model_config = SettingsConfigDict(
        env_prefix="GUIDESCOUT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Sub-configs
    design: DesignConfig = Field(default_factory=DesignConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    def guide_length_in_bounds(self, guide_length: int) -> bool:
        """Check a requested guide length against the configured bounds."""
        return self.design.min_guide_length <= guide_length <= self.design.max_guide_length


@lru_cache()
def get_config() -> GuideScoutConfig:
    """Get cached configuration singleton."""
    return GuideScoutConfig()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging from the settings.

    Logs go to ``log_file`` when set, otherwise to stderr so that stdout
    stays parseable when JSON output is piped.
    """
    settings = get_config()
    level_name = (level or settings.log_level).upper()

    handler_kwargs = {}
    if settings.log_file is not None:
        handler_kwargs["filename"] = str(settings.log_file)
    else:
        handler_kwargs["stream"] = sys.stderr

    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        **handler_kwargs,
    )
