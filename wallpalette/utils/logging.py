"""
Wallpalette Structured Logging
Centralized loguru configuration plus extraction-scoped log helpers.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from wallpalette.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"


class StructuredLogger:
    """Structured logger for the palette extraction pipeline."""

    def __init__(self, level: Optional[str] = None, sink=None):
        self.level = (level or config.LOG_LEVEL).upper()
        self.sink = sink if sink is not None else sys.stderr
        self._configure_logger()

    def _configure_logger(self):
        """Replace loguru's default handler with one structured sink."""
        logger.remove()
        logger.add(self.sink, format=LOG_FORMAT, level=self.level, serialize=False)

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        target = logger.bind(**extra) if extra else logger
        target.log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)

    def extraction_context(self, image_path: Any, mode: str, prefer_light: bool) -> Dict[str, Any]:
        """Fields attached to every log line of one extraction."""
        return {
            "image_path": str(image_path),
            "mode": mode,
            "theme": "light" if prefer_light else "dark",
        }

    def log_extraction_done(self, context: Dict[str, Any], strategy: str,
                            num_colors: int, duration_ms: float):
        self.info(
            f"Palette extracted with {strategy} strategy from {num_colors} colors "
            f"in {duration_ms:.1f}ms",
            extra=context,
        )

    def log_extraction_failed(self, context: Dict[str, Any], error: Exception):
        self.error(f"Palette extraction failed: {type(error).__name__}: {error}", extra=context)


_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the shared logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
