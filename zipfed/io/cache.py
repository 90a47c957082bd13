from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def today_str() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def ensure_dir(path: str) -> str:
    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def raw_dir(cfg: dict, dataset: str, date_str: Optional[str] = None) -> str:
    date_part = date_str or today_str()
    base = Path(cfg["paths"]["raw_dir"]) / dataset / date_part
    return ensure_dir(str(base))

