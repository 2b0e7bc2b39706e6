"""Configuration settings using Pydantic Settings.

Provides typed diagnostics configuration with environment variable support.

Usage:
    from doublebuffer.config import BufferSettings

    # Load from environment variables (DOUBLEBUFFER_*)
    settings = BufferSettings()

    # Or override with explicit values
    settings = BufferSettings(track_origins=True, origin_depth=4)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BufferSettings(BaseSettings):  # type: ignore[misc]
    """Diagnostics configuration for double buffers and borrow cells.

    Attributes:
        track_origins: Record the call site of every live borrow so conflict
            errors can say where the conflicting borrow was taken.
        origin_depth: Stack frames recorded per borrow when tracking (>= 1).

    Environment Variables:
        DOUBLEBUFFER_TRACK_ORIGINS
        DOUBLEBUFFER_ORIGIN_DEPTH
    """

    model_config = SettingsConfigDict(
        env_prefix="DOUBLEBUFFER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    track_origins: bool = False
    origin_depth: int = Field(default=1, ge=1)
