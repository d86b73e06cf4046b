"""Diagnostic logging subsystem for logit-bubbles.

Provides immutable per-cycle records and a configurable logger that
supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from logit_bubbles.logging.logger import CycleLogger
from logit_bubbles.logging.types import CycleRecord

__all__ = [
    "CycleLogger",
    "CycleRecord",
]
