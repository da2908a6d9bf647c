"""Trade journal analytics: normalize journaled trades and compute dashboard statistics."""

__version__ = "1.0.0"
