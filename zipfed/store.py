from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Iterable, Iterator, Optional

import pandas as pd

from zipfed.records import ZipRecord

FRAME_COLUMNS = ["zip", "kind", "city", "state", "lat", "lon"]


def city_key(record: ZipRecord) -> str:
    return record.city


class ZipStore:
    """Ordered, in-memory collection of ZipRecords.

    New records go to the front, so a store filled in read order iterates
    newest first until it is sorted.
    """

    def __init__(self, records: Optional[Iterable[ZipRecord]] = None) -> None:
        self._records: Deque[ZipRecord] = deque()
        for rec in records or ():
            self.insert_front(rec)

    def insert_front(self, record: ZipRecord) -> None:
        self._records.appendleft(record)

    def sort_by(self, key_fn: Callable[[ZipRecord], Any]) -> None:
        self._records = deque(sorted(self._records, key=key_fn))

    def sort_by_city(self) -> None:
        self.sort_by(city_key)

    def __iter__(self) -> Iterator[ZipRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def to_frame(self) -> pd.DataFrame:
        rows = [r.as_dict() for r in self._records]
        df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
        df["lat"] = df["lat"].astype("float32")
        df["lon"] = df["lon"].astype("float32")
        return df
