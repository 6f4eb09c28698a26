"""swapgate - a thin HTTP proxy in front of the Jupiter swap aggregator."""

__version__ = "0.1.0"
