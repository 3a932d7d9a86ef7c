"""Interval to working-hours conversion (pure function)."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime


def truncate_hours(hours: float) -> float:
    """Cut ``hours`` to two decimals, truncating toward zero."""
    return math.trunc(hours * 100) / 100


def resolve_hours(
    item_key: str,
    overrides: Mapping[str, float] | None,
    start: datetime | None,
    end: datetime | None,
) -> float:
    """Return the working hours attributed to one item.

    A manual override for ``item_key`` wins unconditionally and is returned
    as given, zero and negative values included. Otherwise the hours between
    ``start`` and ``end`` are used, clamped at zero; a missing end (item still
    open) counts as zero.
    """
    if overrides and item_key in overrides:
        return float(overrides[item_key])
    if start is None or end is None:
        return 0.0
    hours = (end - start).total_seconds() / 3600.0
    if hours < 0:
        hours = 0.0
    return truncate_hours(hours)
