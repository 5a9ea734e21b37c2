from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from ..core.drift_core.drift_config import DriftConfig
from ..core.jupiter_core.config import JupiterConfig
from .config_loader import get_section, load_config
from .rpc import resolve_rpc_url


@dataclass(frozen=True)
class ReportConfig:
    rpc_url: str
    wallet: Optional[str] = None
    log_level: str = "INFO"
    rpc_timeout: float = 10.0
    jupiter: JupiterConfig = field(default_factory=JupiterConfig)
    drift: DriftConfig = field(default_factory=DriftConfig)


def build_report_config(path: Optional[str] = None, *, wallet: Optional[str] = None) -> ReportConfig:
    """
    Assemble the effective config.

    Wallet: ``wallet`` argument -> ``$WALLET_ADDRESS`` -> ``wallet`` key.
    """
    cfg = load_config(path)
    return ReportConfig(
        rpc_url=resolve_rpc_url(cfg.get("rpc_url")),
        wallet=wallet or os.getenv("WALLET_ADDRESS") or cfg.get("wallet"),
        log_level=os.getenv("LOG_LEVEL") or cfg.get("log_level") or "INFO",
        rpc_timeout=float(cfg.get("rpc_timeout", 10.0)),
        jupiter=JupiterConfig.from_mapping(get_section(cfg, "jupiter")),
        drift=DriftConfig.from_mapping(get_section(cfg, "drift")),
    )
