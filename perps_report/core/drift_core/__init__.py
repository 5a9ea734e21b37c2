"""
Drift core package.

Read-only building blocks for Drift Protocol (perpetuals on Solana): fetch a
wallet's user account and express its perp positions in the shared
position-account shape.
"""

from .drift_client import DriftUserSource
from .drift_config import DriftConfig
from .drift_decoder import DriftUserDecoder
from .drift_markets import DRIFT_MARKETS

__all__ = ["DriftUserSource", "DriftConfig", "DriftUserDecoder", "DRIFT_MARKETS"]
