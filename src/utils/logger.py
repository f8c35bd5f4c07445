# Backward compatibility module for logger
# Re-exports from core.logger

from .core.logger import get_logger, shutdown_logging

__all__ = ["get_logger", "shutdown_logging"]
