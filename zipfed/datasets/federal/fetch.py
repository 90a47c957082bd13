from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from zipfed.io.cache import raw_dir
from zipfed.io.http import download_file
from .schema import DATASET

logger = logging.getLogger(__name__)

FILENAME = "free-zipcode-database-Primary.csv"


def fetch(cfg: Dict[str, Any], out_path: Optional[str] = None) -> str:
    """Place the federal CSV in today's raw cache directory (or `out_path`).

    A configured local_path wins over source_url. Returns the written path.
    """
    ds_cfg = cfg["datasets"].get(DATASET["name"], {})
    source_url = ds_cfg.get("source_url")
    local_path = ds_cfg.get("local_path")

    if not source_url and not local_path:
        raise ValueError("datasets.federal.source_url or local_path must be configured")

    if out_path is None:
        out_path = f"{raw_dir(cfg, DATASET['name'])}/{FILENAME}"
    if local_path:
        if not Path(local_path).exists():
            raise FileNotFoundError(f"datasets.federal.local_path not found: {local_path}")
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(local_path, out_path)
        logger.info("Copied %s to %s", local_path, out_path)
        return out_path

    logger.info("Downloading %s", source_url)
    download_file(source_url, out_path)
    logger.info("Wrote %s", out_path)
    return out_path
