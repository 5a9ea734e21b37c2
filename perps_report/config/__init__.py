"""Configuration loading for perps_report."""

from .config_loader import ConfigError, get_section, load_config, pretty
from .rpc import redacted, resolve_rpc_url

__all__ = ["ConfigError", "get_section", "load_config", "pretty", "redacted", "resolve_rpc_url"]
