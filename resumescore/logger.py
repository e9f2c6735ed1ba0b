"""
Structured logging for resumescore.

Provides centralized logging with console and file outputs, log levels,
and counters for monitoring scoring runs and degraded inputs.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks counters for scoring runs, cache usage and degraded inputs.
    """

    def __init__(
        self,
        name: str = "resumescore",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: Optional[bool] = None,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files
            enable_file: Write logs to file (default: only when log_dir is given)
            enable_console: Output logs to stderr
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "scorecards_built": 0,
            "analyses_run": 0,
            "cache_hits": 0,
            "cache_misses": 0,
            "degraded_inputs": {},
        }

        # stderr keeps stdout free for CLI JSON output
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file is None:
            enable_file = log_dir is not None

        if enable_file:
            self.add_file_handler(log_dir if log_dir is not None else Path("logs"))

    def add_file_handler(self, log_dir: Path) -> Path:
        """Also write every record (DEBUG and up) to a dated file in log_dir."""
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"resumescore_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)
        # File captures DEBUG even when the console level is higher
        self.logger.setLevel(logging.DEBUG)
        return log_file

    def set_level(self, level: str):
        """Change the console level."""
        numeric = getattr(logging, level.upper())
        for handler in self.logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(numeric)
        if not any(isinstance(h, logging.FileHandler) for h in self.logger.handlers):
            self.logger.setLevel(numeric)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_scorecard(self):
        """Increment scorecard counter."""
        self.metrics["scorecards_built"] += 1

    def record_analysis(self):
        """Increment keyword analysis counter."""
        self.metrics["analyses_run"] += 1

    def record_cache_hit(self):
        self.metrics["cache_hits"] += 1

    def record_cache_miss(self):
        self.metrics["cache_misses"] += 1

    def record_degraded_input(self, reason: str):
        """Count an input that fell back to a default value."""
        degraded = self.metrics["degraded_inputs"]
        degraded[reason] = degraded.get(reason, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = dict(self.metrics)
        metrics_copy["degraded_inputs"] = dict(self.metrics["degraded_inputs"])

        lookups = metrics_copy["cache_hits"] + metrics_copy["cache_misses"]
        if lookups > 0:
            metrics_copy["cache_hit_rate"] = round(metrics_copy["cache_hits"] / lookups, 3)

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Scoring Session Metrics ===")
        self.info(f"Scorecards: {metrics['scorecards_built']}")
        self.info(f"Keyword analyses: {metrics['analyses_run']}")

        if "cache_hit_rate" in metrics:
            rate = metrics["cache_hit_rate"] * 100
            self.info(f"Cache: {metrics['cache_hits']} hits, {metrics['cache_misses']} misses ({rate:.1f}%)")

        if metrics["degraded_inputs"]:
            self.info("Degraded inputs:")
            for reason, count in metrics["degraded_inputs"].items():
                self.info(f"  {reason}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "resumescore",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
