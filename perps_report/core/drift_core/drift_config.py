from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DRIFT_PROGRAM_ID = "dRiftyHA39MWEi3m9aunc5MzRF1JYuBsbn6VPcn33UH"


@dataclass(frozen=True)
class DriftConfig:
    """
    Configuration for reading Drift user accounts.

    The RPC endpoint is resolved once for the whole report (see
    ``perps_report.config.rpc``) so it is not repeated here.
    """

    program_id: str = DRIFT_PROGRAM_ID
    sub_account_id: int = 0
    commitment: str = "confirmed"

    @classmethod
    def from_mapping(cls, section: Optional[Mapping[str, Any]] = None) -> "DriftConfig":
        s = dict(section or {})
        return cls(
            program_id=os.getenv("DRIFT_PROGRAM_ID") or s.get("program_id") or DRIFT_PROGRAM_ID,
            sub_account_id=int(s.get("sub_account_id", 0)),
            commitment=s.get("commitment") or "confirmed",
        )
