"""Read-only open-position report for Solana perps protocols (Drift, Jupiter)."""

__version__ = "0.1.0"
