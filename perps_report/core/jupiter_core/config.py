from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

PERPS_PROGRAM_ID = "PERPHjGBqRHArX4DySjwM6UJHiR3sWAatqfdBS2qQJu"


@dataclass(frozen=True)
class JupiterConfig:
    """Configuration container for Jupiter Perps reads and quote lookups."""

    program_id: str = PERPS_PROGRAM_ID
    commitment: str = "confirmed"
    # owner pubkey sits right after the 8-byte Anchor discriminator
    owner_offset: int = 8

    # Quote API (override-able via env for safety)
    swap_base: str = "https://api.jup.ag"
    quote_path: str = "/swap/v1/quote"
    slippage_bps: int = 50
    timeout: float = 10.0
    api_key: Optional[str] = None

    @property
    def quote_url(self) -> str:
        return f"{self.swap_base.rstrip('/')}{self.quote_path}"

    @classmethod
    def from_mapping(cls, section: Optional[Mapping[str, Any]] = None) -> "JupiterConfig":
        """Build from the ``jupiter`` config section; env vars win over the file."""
        s = dict(section or {})
        return cls(
            program_id=os.getenv("PERPS_PROGRAM_ID") or s.get("program_id") or PERPS_PROGRAM_ID,
            commitment=s.get("commitment") or "confirmed",
            owner_offset=int(s.get("owner_offset", 8)),
            swap_base=os.getenv("JUP_SWAP_BASE") or s.get("swap_base") or cls.swap_base,
            quote_path=s.get("quote_path") or cls.quote_path,
            slippage_bps=int(s.get("slippage_bps", 50)),
            timeout=float(s.get("timeout", 10.0)),
            api_key=os.getenv("JUP_API_KEY") or s.get("api_key"),
        )
