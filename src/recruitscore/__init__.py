"""Candidate ranking and behavioural assessment scoring."""

__version__ = "0.1.0"
