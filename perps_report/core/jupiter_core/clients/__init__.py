"""Client wrappers for Jupiter APIs and Perps program accounts."""

from .jup_quote_client import JupQuoteClient
from .perps_account_source import PerpsAccountSource, account_discriminator

__all__ = ["JupQuoteClient", "PerpsAccountSource", "account_discriminator"]
