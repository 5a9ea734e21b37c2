"""Jupiter services: quote-backed price resolution and position decoding."""

from .position_decoder import PerpsPositionDecoder
from .price_service import JupiterPriceResolver, price_from_quote

__all__ = ["PerpsPositionDecoder", "JupiterPriceResolver", "price_from_quote"]
