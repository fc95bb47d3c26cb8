"""Streak, milestone and celebration engine for meditation and workout tracking"""

__version__ = "0.1.0"
