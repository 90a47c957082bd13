from __future__ import annotations

from typing import Callable, Iterable, Optional, TextIO

from zipfed.records import ZipRecord
from zipfed.store import ZipStore

Predicate = Callable[[ZipRecord], bool]


def render_record(r: ZipRecord) -> str:
    return f"{r.zip},{r.kind.label},{r.city},{r.state},{float(r.lat):f},{float(r.lon):f}"


def export_record(sink: TextIO, r: ZipRecord) -> None:
    sink.write(render_record(r) + "\n")


def export_store(sink: TextIO, store: ZipStore, predicate: Optional[Predicate] = None) -> int:
    written = 0
    for rec in store:
        if predicate is not None and not predicate(rec):
            continue
        export_record(sink, rec)
        written += 1
    return written


def state_filter(states: Iterable[str]) -> Optional[Predicate]:
    """Predicate keeping records whose state is in `states`; None when empty."""
    wanted = frozenset(states)
    if not wanted:
        return None

    def _keep(r: ZipRecord) -> bool:
        return r.state in wanted

    return _keep
