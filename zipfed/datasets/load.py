from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from zipfed.datasets.dialect import Dialect, parse_line
from zipfed.datasets.federal.schema import DIALECT as FEDERAL
from zipfed.datasets.simplified.schema import DIALECT as SIMPLIFIED
from zipfed.errors import EmptyLine, ParseError
from zipfed.store import ZipStore

logger = logging.getLogger(__name__)

DIALECTS: Dict[str, Dialect] = {
    FEDERAL.name: FEDERAL,
    SIMPLIFIED.name: SIMPLIFIED,
}

ON_ERROR_ABORT = "abort"
ON_ERROR_SKIP = "skip"
ON_ERROR_CHOICES = (ON_ERROR_ABORT, ON_ERROR_SKIP)


def get_dialect(name: str) -> Dialect:
    try:
        return DIALECTS[name]
    except KeyError:
        raise ValueError(f"Unknown dialect {name!r}; expected one of {sorted(DIALECTS)}") from None


def load_lines(
    lines: Iterable[str],
    dialect: Dialect,
    skip_header: bool = True,
    on_error: str = ON_ERROR_ABORT,
    store: Optional[ZipStore] = None,
) -> ZipStore:
    """Parse raw lines into a ZipStore.

    The first line is dropped when `skip_header` is set. Blank lines are
    ignored. With on_error="abort" the first bad line raises ParseError
    (carrying its 1-based line number) and nothing further is read; with
    on_error="skip" it is logged and loading continues.
    """
    if on_error not in ON_ERROR_CHOICES:
        raise ValueError(f"on_error must be one of {ON_ERROR_CHOICES}, got {on_error!r}")
    if store is None:
        store = ZipStore()

    loaded = 0
    skipped = 0
    for lineno, line in enumerate(lines, start=1):
        if lineno == 1 and skip_header:
            continue
        raw = line.rstrip("\r\n")
        try:
            rec = parse_line(dialect, raw)
        except EmptyLine:
            continue
        except ParseError as exc:
            exc.at_line(lineno)
            if on_error == ON_ERROR_ABORT:
                raise
            logger.warning("Skipping %s record: %s", dialect.name, exc)
            skipped += 1
            continue
        store.insert_front(rec)
        loaded += 1

    if skipped:
        logger.info("Loaded %d %s records (%d skipped)", loaded, dialect.name, skipped)
    else:
        logger.info("Loaded %d %s records", loaded, dialect.name)
    return store
