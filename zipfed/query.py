from __future__ import annotations

from typing import Iterable, List, TextIO

from zipfed.store import ZipStore


def lookup(store: ZipStore, city: str) -> List[str]:
    """Zips of every record whose city equals `city` exactly, in store order."""
    return [r.zip for r in store if r.city == city]


def run_queries(store: ZipStore, queries: Iterable[str], out: TextIO) -> int:
    answered = 0
    for line in queries:
        city = line.rstrip("\r\n")
        if not city:
            continue
        for z in lookup(store, city):
            out.write(z + "\n")
        out.flush()
        answered += 1
    return answered
