"""Core scheduling module."""

from confirmator.core.types import AcceptPolicy, ConfirmationType, Decision
from confirmator.core.classifier import classify
from confirmator.core.interval import format_interval
from confirmator.core.ticker import ConsoleProgressBar, WaitTicker, console_display, null_display
from confirmator.core.state import ScheduleState
from confirmator.core.scheduler import MAX_BATCH_SIZE, BatchScheduler, partition, run_scheduler_loop

__all__ = [
    "MAX_BATCH_SIZE",
    "AcceptPolicy",
    "BatchScheduler",
    "ConfirmationType",
    "ConsoleProgressBar",
    "Decision",
    "ScheduleState",
    "WaitTicker",
    "classify",
    "console_display",
    "format_interval",
    "null_display",
    "partition",
    "run_scheduler_loop",
]
