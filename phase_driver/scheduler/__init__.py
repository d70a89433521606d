"""Task schedulers that test phases are submitted to."""

from phase_driver.scheduler.application import Application
from phase_driver.scheduler.base import TaskScheduler

__all__ = ["Application", "TaskScheduler"]
