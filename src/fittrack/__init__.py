"""fittrack - personal fitness tracking with trend insights."""

__version__ = "0.1.0"
