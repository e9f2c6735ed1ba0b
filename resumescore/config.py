"""
Runtime settings read from the environment.

Call load_env() first if values should come from a .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .logger import get_logger

logger = get_logger()


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    cache_db: Optional[Path] = None
    ideal_sentence_length: float = 20.0
    sentence_sigma: float = 10.0
    ideal_bullet_length: float = 20.0
    bullet_sigma: float = 10.0


def _positive_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric setting", key=key, value=raw)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive setting", key=key, value=raw)
        return default
    return value


def _optional_path(env: Mapping[str, str], key: str) -> Optional[Path]:
    raw = (env.get(key) or "").strip()
    return Path(raw) if raw else None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from RESUMESCORE_* variables (os.environ by default)."""
    env = os.environ if env is None else env
    defaults = Settings()

    level = (env.get("RESUMESCORE_LOG_LEVEL") or defaults.log_level).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        logger.warning("Unknown log level, using INFO", value=level)
        level = defaults.log_level

    return Settings(
        log_level=level,
        log_dir=_optional_path(env, "RESUMESCORE_LOG_DIR"),
        cache_db=_optional_path(env, "RESUMESCORE_CACHE_DB"),
        ideal_sentence_length=_positive_float(env, "RESUMESCORE_IDEAL_SENTENCE_LENGTH", defaults.ideal_sentence_length),
        sentence_sigma=_positive_float(env, "RESUMESCORE_SENTENCE_SIGMA", defaults.sentence_sigma),
        ideal_bullet_length=_positive_float(env, "RESUMESCORE_IDEAL_BULLET_LENGTH", defaults.ideal_bullet_length),
        bullet_sigma=_positive_float(env, "RESUMESCORE_BULLET_SIGMA", defaults.bullet_sigma),
    )
