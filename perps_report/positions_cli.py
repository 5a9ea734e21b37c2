import argparse
import asyncio
import sys
from typing import List, Optional

from solders.pubkey import Pubkey

from perps_report.config import ConfigError, pretty, redacted
from perps_report.config.settings import build_report_config
from perps_report.core.logging import configure_console_log, log
from perps_report.core.positions_core.position_report import run_report

parser = argparse.ArgumentParser(description="Print open Drift + Jupiter perp positions for a wallet")
parser.add_argument("--wallet", help="Wallet address (overrides WALLET_ADDRESS / config 'wallet')")
parser.add_argument("--config", help="Path to a YAML config file")
parser.add_argument("--debug", action="store_true", help="Verbose logging")


def _valid_wallet(address: str) -> bool:
    try:
        Pubkey.from_string(address)
    except Exception:  # noqa: BLE001
        return False
    return True


async def _amain(args: argparse.Namespace) -> int:
    cfg = build_report_config(args.config, wallet=args.wallet)
    configure_console_log(debug=args.debug, level=cfg.log_level)

    if not cfg.wallet:
        log.error("❌ Missing wallet: pass --wallet, set WALLET_ADDRESS, or add 'wallet' to the config")
        return 1
    if not _valid_wallet(cfg.wallet):
        log.error(f"❌ Not a valid Solana address: {cfg.wallet}")
        return 1

    log.debug("Effective config", payload=pretty({"rpc_url": redacted(cfg.rpc_url), "wallet": cfg.wallet}))
    log.banner("Perps position report")
    log.start_timer("report")
    await run_report(cfg, cfg.wallet)
    log.end_timer("report")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parser.parse_args(argv)
    try:
        return asyncio.run(_amain(args))
    except ConfigError as exc:
        log.error(f"❌ Config error: {exc}")
        return 1
    except Exception as exc:  # noqa: BLE001
        log.error(f"❌ Error in main: {exc!r}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
