import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from zipfed.datasets.federal.schema import DATASET as FEDERAL_DATASET
from zipfed.datasets.load import DIALECTS, ON_ERROR_ABORT, ON_ERROR_CHOICES


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    load_dotenv()
    if path:
        cfg_path = Path(path).resolve()
        if not cfg_path.exists():
            raise FileNotFoundError(f"Config not found: {cfg_path}")
        with cfg_path.open("r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        base_dir = cfg_path.parent.parent
    else:
        cfg = {}
        base_dir = Path.cwd()

    cfg.setdefault("project", {})
    cfg.setdefault("load", {})
    cfg.setdefault("export", {})
    cfg.setdefault("datasets", {})
    cfg["datasets"].setdefault("federal", {})

    cfg["project"].setdefault("raw_dir", "data/raw")

    cfg["load"].setdefault("dialect", "federal")
    cfg["load"].setdefault("skip_header", True)
    cfg["load"].setdefault("on_error", ON_ERROR_ABORT)
    if cfg["load"]["dialect"] not in DIALECTS:
        raise ValueError(f"load.dialect must be one of {sorted(DIALECTS)}, got {cfg['load']['dialect']!r}")
    if cfg["load"]["on_error"] not in ON_ERROR_CHOICES:
        raise ValueError(f"load.on_error must be one of {ON_ERROR_CHOICES}, got {cfg['load']['on_error']!r}")

    states = cfg["export"].get("states") or []
    if isinstance(states, str):
        states = [states]
    cfg["export"]["states"] = [str(s) for s in states]

    federal = cfg["datasets"]["federal"]
    federal.setdefault("source_url", FEDERAL_DATASET["source_url"])
    federal.setdefault("local_path", None)
    if os.getenv("ZIPFED_SOURCE_URL"):
        federal["source_url"] = os.getenv("ZIPFED_SOURCE_URL")

    cfg["paths"] = {
        "base_dir": str(base_dir),
        "raw_dir": str((base_dir / cfg["project"]["raw_dir"]).resolve()),
    }

    return cfg
