from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from zipfed.errors import EmptyLine, HeaderRow, InvalidNumeric, TruncatedRecord
from zipfed.records import ZipRecord, ZipType

QUOTE = '"'
DELIMITER = ","
ZIP_WIDTH = 5

FIELDS = ("zip", "kind", "city", "state", "lat", "lon")


@dataclass(frozen=True)
class Dialect:
    """Column layout of one flavour of the ZIP code CSV.

    `columns` lists the role of every column in order; `None` marks a column
    that is read and thrown away. Tokens past the last listed column are
    ignored.
    """
    name: str
    columns: Tuple[Optional[str], ...]
    quoted: bool = False
    header_sentinel: Optional[str] = None

    def __post_init__(self) -> None:
        roles = [c for c in self.columns if c is not None]
        if sorted(roles) != sorted(FIELDS):
            raise ValueError(f"Dialect {self.name} must map each of {FIELDS} exactly once, got {roles}")

    @property
    def width(self) -> int:
        return len(self.columns)


def strip_quotes(token: str) -> str:
    return token.replace(QUOTE, "")


def pad_zip(token: str) -> str:
    # tokens such as "501" arrive without their leading zeros
    return token.rjust(ZIP_WIDTH, "0")


def _to_float32(token: str, column: str) -> np.float32:
    try:
        return np.float32(float(token))
    except ValueError:
        raise InvalidNumeric(f"{column} is not a number: {token!r}") from None


def tokenize(dialect: Dialect, raw: str) -> List[str]:
    tokens = raw.split(DELIMITER)
    if len(tokens) < dialect.width:
        raise TruncatedRecord(f"{dialect.name} record needs {dialect.width} columns, got {len(tokens)}: {raw!r}")
    return tokens[: dialect.width]


def parse_line(dialect: Dialect, raw: Optional[str]) -> ZipRecord:
    """Parse one data line into a ZipRecord.

    Raises:
        EmptyLine: `raw` is None or empty.
        HeaderRow: the first token is the dialect's header sentinel.
        TruncatedRecord: fewer columns than the dialect consumes.
        InvalidNumeric: lat or lon is not a number.
    """
    if not raw:
        raise EmptyLine("empty line")

    first = raw.split(DELIMITER, 1)[0]
    if dialect.header_sentinel is not None and first == dialect.header_sentinel:
        raise HeaderRow(f"column header row: {raw!r}")

    values: Dict[str, str] = {}
    for role, token in zip(dialect.columns, tokenize(dialect, raw)):
        if role is None:
            continue
        values[role] = strip_quotes(token) if dialect.quoted else token

    return ZipRecord(
        zip=pad_zip(values["zip"]),
        kind=ZipType.from_token(values["kind"]),
        city=values["city"],
        state=values["state"],
        lat=_to_float32(values["lat"], "lat"),
        lon=_to_float32(values["lon"], "lon"),
    )
