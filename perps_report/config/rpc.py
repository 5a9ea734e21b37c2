import os
from typing import Optional

PUBLIC_MAINNET_RPC = "https://api.mainnet-beta.solana.com"

PLACEHOLDER_VALUES = {"<YOUR_KEY>", "YOUR_KEY", "changeme"}


def _helius_key() -> str:
    key = (os.getenv("HELIUS_API_KEY") or "").strip()
    if key and "placeholder" not in key.lower() and key not in PLACEHOLDER_VALUES:
        return key
    return ""


def helius_url(key: str) -> str:
    return f"https://mainnet.helius-rpc.com/?api-key={key}"


def resolve_rpc_url(configured: Optional[str] = None) -> str:
    """
    Pick the Solana RPC endpoint.

    Order of precedence:

    1. ``$RPC_URL``
    2. ``$HELIUS_API_KEY`` (Helius mainnet endpoint)
    3. ``configured`` (``rpc_url`` from the YAML config)
    4. public Solana mainnet (rate-limited)
    """
    override = (os.getenv("RPC_URL") or "").strip()
    if override:
        return override
    key = _helius_key()
    if key:
        return helius_url(key)
    if configured and configured.strip():
        return configured.strip()
    return PUBLIC_MAINNET_RPC


def redacted(url: str) -> str:
    base, sep, _ = url.partition("?")
    if not sep:
        return url
    return f"{base}?api-key=***REDACTED***"
