import logging
import os

# ==============================================================================
#  RUNTIME CONFIGURATION & DEFAULTS
# ==============================================================================

"""
Defines the runtime configuration for the batch runner and the CLI.

Module constants are read from the environment at import time. The CLI loads a `.env`
file from the current working directory first and then calls the `read_*` helpers
again, so variables kept in `.env` apply to command runs too.
"""

EXECUTOR_KINDS = ("process", "thread")

DEFAULT_MAX_WORKERS = os.cpu_count() or 1
DEFAULT_EXECUTOR = "process"
DEFAULT_LOG_LEVEL = "WARNING"


def read_max_workers() -> int:
    """`SVIS_MAX_WORKERS`: pool size for concurrent batches. Falls back to the number of CPUs."""
    raw = os.getenv("SVIS_MAX_WORKERS")
    if not raw:
        return DEFAULT_MAX_WORKERS
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        print(f"⚠️ Warning: invalid SVIS_MAX_WORKERS={raw!r}, using {DEFAULT_MAX_WORKERS}")
        return DEFAULT_MAX_WORKERS
    return value


def read_executor() -> str:
    """`SVIS_EXECUTOR`: `process` (sidesteps the GIL for decoding work) or `thread`."""
    value = os.getenv("SVIS_EXECUTOR", DEFAULT_EXECUTOR).lower()
    if value not in EXECUTOR_KINDS:
        print(f"⚠️ Warning: invalid SVIS_EXECUTOR={value!r}, using {DEFAULT_EXECUTOR!r}")
        return DEFAULT_EXECUTOR
    return value


def read_log_level() -> str:
    """`SVIS_LOG_LEVEL`: level name for the CLI logging setup."""
    value = os.getenv("SVIS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(value), int):
        print(f"⚠️ Warning: invalid SVIS_LOG_LEVEL={value!r}, using {DEFAULT_LOG_LEVEL!r}")
        return DEFAULT_LOG_LEVEL
    return value


MAX_WORKERS = read_max_workers()
EXECUTOR = read_executor()
LOG_LEVEL = read_log_level()
