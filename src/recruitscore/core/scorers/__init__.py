"""Behavioural test scorers."""

from .bigfive import BigFiveScorer
from .disc import DiscScorer
from .sjt import SjtScorer

__all__ = [
    "BigFiveScorer",
    "DiscScorer",
    "SjtScorer",
]
