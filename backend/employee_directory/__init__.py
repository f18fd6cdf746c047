"""Employee Directory — REST record store for employee records and its dashboard client."""

__version__ = "1.0.0"
