from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from lispy.errors import LispyConfigError

PRELUDE_FILENAME = "prelude.lspy"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_PROMPT = "lispy> "
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_prelude_path() -> Optional[Path]:
    """Prelude file named by LISPY_PRELUDE_PATH, or None when unset.

    A directory is accepted and resolves to the prelude file inside it.
    """
    raw = os.environ.get("LISPY_PRELUDE_PATH", "").strip()
    if not raw:
        return None
    p = Path(raw).expanduser()
    return p / PRELUDE_FILENAME if p.is_dir() else p


def get_log_level() -> str:
    level = os.environ.get("LISPY_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if level not in _LEVELS:
        raise LispyConfigError(
            f"LISPY_LOG_LEVEL must be one of {', '.join(_LEVELS)}, got {level!r}"
        )
    return level


def get_prompt() -> str:
    return os.environ.get("LISPY_PROMPT", DEFAULT_PROMPT)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the interpreter.

    Args:
        level: Logging level name; defaults to LISPY_LOG_LEVEL.
    """
    level = (level or get_log_level()).upper()
    if level not in _LEVELS:
        raise LispyConfigError(f"Unknown log level {level!r}")
    # Log to stderr so results printed on stdout stay clean
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger(__name__).info("Logging initialized at %s level", level)
