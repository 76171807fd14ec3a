# credkeep/config.py
"""
Simple settings persistence for credkeep.
Settings saved as JSON in %APPDATA%/credkeep/config.json (Windows) or ~/.credkeep/config.json (fallback).
CREDKEEP_CONFIG_DIR overrides the directory.
"""

import os
import json
import logging
from typing import Dict, Any

from .storage import atomic_write_bytes, dump_json_bytes

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "generator_length": 12,
    "use_upper": True,
    "use_lower": True,
    "use_digits": True,
    "use_symbols": True,
    "stale_after_months": 6,
    "log_level": "WARNING",
}

def _appdata_dir() -> str:
    override = os.getenv("CREDKEEP_CONFIG_DIR")
    appdata = os.getenv("APPDATA")
    if override:
        d = override
    elif appdata:
        d = os.path.join(appdata, "credkeep")
    else:
        d = os.path.join(os.path.expanduser("~"), ".credkeep")
    return d

def config_path() -> str:
    return os.path.join(_appdata_dir(), "config.json")

def load_config() -> Dict[str, Any]:
    p = config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    if isinstance(data, dict):
        out.update(data)
    return out

def save_config(cfg: Dict[str, Any]) -> None:
    atomic_write_bytes(config_path(), dump_json_bytes(cfg))

def generation_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Keyword arguments for generator.generate() taken from a config."""
    return {
        "length": int(cfg.get("generator_length", DEFAULTS["generator_length"])),
        "use_upper": bool(cfg.get("use_upper", True)),
        "use_lower": bool(cfg.get("use_lower", True)),
        "use_digits": bool(cfg.get("use_digits", True)),
        "use_symbols": bool(cfg.get("use_symbols", True)),
    }
