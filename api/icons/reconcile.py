"""
Merge of the local baseline list with store-origin icon records.
"""

from __future__ import annotations

from collections.abc import Iterable

from .schemas import Icon


def reconcile(baseline: Iterable[Icon], store: Iterable[Icon]) -> list[Icon]:
    """
    Union keyed by `id`: baseline records first in their order, then store
    records whose id is not already present, in store order.

    Baseline wins every id collision. A repeated id inside either list keeps
    its first occurrence, so the result never holds an id twice.
    """
    merged: list[Icon] = []
    seen: set[str] = set()
    for icon in baseline:
        if icon.id in seen:
            continue
        seen.add(icon.id)
        merged.append(icon)
    for icon in store:
        if icon.id in seen:
            continue
        seen.add(icon.id)
        merged.append(icon)
    return merged
