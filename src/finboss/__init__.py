"""FinBoss personal finance API."""

__version__ = "1.0.0"
