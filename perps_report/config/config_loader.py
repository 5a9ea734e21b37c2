import json
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv


class ConfigError(RuntimeError):
    pass


def _resolve_env(val: Any) -> Any:
    """Resolve ENV:FOO placeholders recursively."""
    if isinstance(val, str) and val.startswith("ENV:"):
        env_key = val.split("ENV:", 1)[1].strip()
        v = os.environ.get(env_key)
        if v is None or v == "":
            raise ConfigError(f"Missing required environment variable: {env_key}")
        return v
    if isinstance(val, dict):
        return {k: _resolve_env(v) for k, v in val.items()}
    if isinstance(val, list):
        return [_resolve_env(v) for v in val]
    return val


def load_config(path: Optional[str] = None, *, dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the report config.

    ``.env`` is loaded first so ``ENV:`` placeholders can point at it. With no
    ``path`` an empty mapping is returned and every setting falls back to its
    default.
    """
    load_dotenv(dotenv_path=dotenv_path, override=False)
    if not path:
        return {}
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return _resolve_env(raw)


def get_section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = (cfg or {}).get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section {key!r} must be a mapping, got {type(section).__name__}")
    return section


def pretty(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True, default=str)
