import logging
import os

logger = logging.getLogger(__name__)

FORMAT_ENV = "SPARSELAB_FORMAT"
LOG_LEVEL_ENV = "SPARSELAB_LOG_LEVEL"

_default_format = "map-unordered"
_current_format = _default_format


def _known_formats():
    from .sparse import FORMATS

    return FORMATS


def set_default_format(name: str) -> None:
    global _current_format
    if name not in _known_formats():
        raise ValueError(f"unknown sparse format {name!r}")
    _current_format = name


def get_default_format() -> str:
    # If user set env externally, honor it
    env = os.environ.get(FORMAT_ENV)
    if env:
        if env in _known_formats():
            return env
        logger.warning("ignoring %s=%r: not a known format", FORMAT_ENV, env)
    return _current_format


def get_log_level(default: int = logging.WARNING) -> int:
    env = os.environ.get(LOG_LEVEL_ENV)
    if not env:
        return default
    if env.isdigit():
        return int(env)
    level = logging.getLevelName(env.upper())
    return level if isinstance(level, int) else default
