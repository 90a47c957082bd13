from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

import numpy as np


class ZipType(Enum):
    INVALID = "INVALID"
    STANDARD = "STANDARD"
    PO_BOX = "PO_BOX"
    UNIQUE = "UNIQUE"
    MILITARY = "MILITARY"

    @classmethod
    def from_token(cls, token: str) -> "ZipType":
        """Exact, case-sensitive match against the dataset's ZipCodeType text."""
        return _TOKEN_TO_TYPE.get(token, cls.INVALID)

    @property
    def label(self) -> str:
        return _TYPE_TO_TOKEN[self]


_TYPE_TO_TOKEN: Dict[ZipType, str] = {t: t.value for t in ZipType}
_TOKEN_TO_TYPE: Dict[str, ZipType] = {v: k for k, v in _TYPE_TO_TOKEN.items()}


@dataclass(frozen=True)
class ZipRecord:
    zip: str
    kind: ZipType
    city: str
    state: str
    lat: np.float32
    lon: np.float32

    def as_dict(self) -> Dict[str, object]:
        return {
            "zip": self.zip,
            "kind": self.kind.label,
            "city": self.city,
            "state": self.state,
            "lat": self.lat,
            "lon": self.lon,
        }
