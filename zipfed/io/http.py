from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

CHUNK_SIZE = 1 << 16


def build_session(retries: int = 3, backoff: float = 0.5) -> requests.Session:
    retry = Retry(
        total=retries,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def download_file(url: str, out_path: str, headers: Optional[Dict[str, str]] = None, timeout: float = 60) -> str:
    """Stream `url` to `out_path`.

    The body is written to `<out_path>.part` and renamed once complete, so an
    interrupted download never leaves a truncated CSV at `out_path`.
    """
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    part_path = f"{out_path}.part"
    session = build_session()
    with session.get(url, headers=headers, timeout=timeout, stream=True) as r:
        r.raise_for_status()
        try:
            with open(part_path, "wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except BaseException:
            if os.path.exists(part_path):
                os.remove(part_path)
            raise
    os.replace(part_path, out_path)
    return out_path
