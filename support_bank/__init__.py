"""SupportBank: load transaction files and report who owes whom."""

__version__ = "0.1.0"
