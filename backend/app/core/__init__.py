"""
Core package initialization.
"""

from app.core.config import Settings, get_settings
from app.core.logging import bind_session_context, configure_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "bind_session_context",
    "configure_logging",
]
