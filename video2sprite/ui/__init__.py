"""
Console UI components.
"""

from .progress import SamplingProgress
from .reporter import SummaryReporter

__all__ = [
    "SamplingProgress",
    "SummaryReporter",
]
