"""
sorttrace: step-by-step traces of classic sorting algorithms.

    from sorttrace import run
    trace = run("bubble", [5, 3, 8, 1])
    trace.final_array   # [1, 3, 5, 8]
    trace.comparisons   # 6
    trace.steps[3]      # Step(array=..., comparing=..., description=...)
"""

import logging

from .algorithms import ALGORITHM_KEYS, STABLE_KEYS, get_algorithm, run
from .logging_config import (
    LOGGER_NAME,
    configure_from_env,
    disable_logging,
    enable_console_logging,
    set_level,
)
from .trace import Recorder, Step, Trace

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ALGORITHM_KEYS",
    "STABLE_KEYS",
    "get_algorithm",
    "run",
    "Recorder",
    "Step",
    "Trace",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "set_level",
]
