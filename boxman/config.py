"""Configuration settings using Pydantic Settings.

Usage:
    from boxman.config import BoxmanSettings

    # Load from environment variables (BOXMAN_*) and an optional .env file
    settings = BoxmanSettings()

    # Or override with explicit values
    settings = BoxmanSettings(animation_duration=0.0, session="alice")
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BoxmanSettings(BaseSettings):
    """Runtime configuration for a game session.

    Attributes:
        animation_duration: Seconds one move's animation takes.
        completion_pause: Seconds to linger on a completed level before the
            next one is loaded.
        levels_path: Level pack to play (JSON or XSB text); ``None`` uses the
            built-in levels.
        progress_path: JSON file storing the level to resume from.
        session: Key under which progress is stored.
        log_level: Logging level name for the terminal host.
        render_resolution: Width in pixels of rendered images.

    Environment Variables:
        BOXMAN_ANIMATION_DURATION
        BOXMAN_COMPLETION_PAUSE
        BOXMAN_LEVELS_PATH
        BOXMAN_PROGRESS_PATH
        BOXMAN_SESSION
        BOXMAN_LOG_LEVEL
        BOXMAN_RENDER_RESOLUTION
    """

    model_config = SettingsConfigDict(
        env_prefix="BOXMAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    animation_duration: float = Field(default=0.2, ge=0.0)
    completion_pause: float = Field(default=1.5, ge=0.0)
    levels_path: str | None = None
    progress_path: str = "~/.boxman/progress.json"
    session: str = "default"
    log_level: str = "WARNING"
    render_resolution: int = Field(default=480, gt=0)
