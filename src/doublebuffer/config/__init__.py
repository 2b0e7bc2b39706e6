"""Configuration module using Pydantic Settings.

Usage:
    from doublebuffer.config import BufferSettings

    settings = BufferSettings(track_origins=True)
"""

from doublebuffer.config.settings import BufferSettings

__all__ = [
    "BufferSettings",
]
