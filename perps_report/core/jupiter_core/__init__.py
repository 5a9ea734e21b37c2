"""Jupiter Perpetuals core.

Price lookups via the Jupiter quote API and read-only access to Perps
``Position`` accounts (fetch + decode).
"""

__all__ = ["config", "errors", "markets", "clients", "services"]
