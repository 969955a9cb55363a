"""Cross-cutting helpers for the backend."""

from postboard_backend.shared.log_config import LOG_FORMAT, configure_logging

__all__ = ["LOG_FORMAT", "configure_logging"]
