"""
config.py - Interaction and snapping configuration.

Uses pydantic-settings so every tunable can be overridden from the environment
(prefix ``ARTBOARD_``) or a local ``.env`` file.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InteractionSettings(BaseSettings):
    """Canvas interaction settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARTBOARD_",
        extra="ignore",
    )

    # Snapping (artboard-local px, independent of zoom)
    snap_threshold_px: float = Field(default=5.0, ge=0)
    grid_size_px: float = Field(default=8.0, ge=0)
    grid_snapping: bool = True

    # Live broadcast cadence for the asyncio scheduler (~60 fps)
    frame_interval_ms: float = Field(default=16.0, gt=0)

    # Guide overlay
    guide_color: str = "rgb(59 130 246)"
    guide_thickness_px: float = Field(default=1.0, gt=0)
    guide_opacity: float = Field(default=0.7, ge=0.0, le=1.0)

    log_level: str = "WARNING"

    @property
    def effective_grid_size(self) -> float:
        """Grid size to snap to, 0 when grid snapping is disabled."""
        return self.grid_size_px if self.grid_snapping else 0.0


@lru_cache()
def get_settings() -> InteractionSettings:
    """Get cached settings instance."""
    return InteractionSettings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for hosts embedding the canvas core."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
