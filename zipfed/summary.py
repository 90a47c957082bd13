from __future__ import annotations

from typing import Dict

import pandas as pd

from zipfed.records import ZipType
from zipfed.store import ZipStore


def kind_counts(df: pd.DataFrame) -> pd.Series:
    labels = [t.label for t in ZipType]
    return df["kind"].value_counts().reindex(labels, fill_value=0).rename("records")


def state_counts(df: pd.DataFrame, top: int = 10) -> pd.Series:
    counts = df.groupby("state").size().rename("records")
    counts = counts.sort_values(ascending=False, kind="mergesort")
    return counts.head(top) if top > 0 else counts


def build_summary(store: ZipStore, top: int = 10) -> Dict[str, pd.Series]:
    df = store.to_frame()
    return {
        "kind": kind_counts(df),
        "state": state_counts(df, top),
    }


def render_summary(store: ZipStore, top: int = 10) -> str:
    tables = build_summary(store, top)
    parts = [f"records: {len(store)}"]
    for name, counts in tables.items():
        parts.append(f"\nby {name}:")
        parts.append(counts.to_string() if not counts.empty else "(none)")
    return "\n".join(parts) + "\n"
