"""Mapping raw Jira issue JSON into Item instances."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from .config import FIELD_IDS, WORK_TYPE_LABELS
from .models import ChangeEvent, FieldChange, Item
from .status import clean_status_name


def _text(value: Any) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def _option_value(value: Any) -> str:
    """Custom fields arrive as plain strings or as ``{"value": ...}`` options."""
    if isinstance(value, dict):
        return _text(value.get("value") or value.get("name"))
    if isinstance(value, list):
        return ", ".join(v for v in (_option_value(x) for x in value) if v)
    return _text(value)


def work_type_from_labels(labels: Iterable[str]) -> str:
    for label in labels:
        if label in WORK_TYPE_LABELS:
            return label
    return ""


def map_change_event(history: dict[str, Any]) -> ChangeEvent:
    items = tuple(
        FieldChange(
            field=item.get("field"),
            from_value=item.get("fromString"),
            to_value=item.get("toString"),
        )
        for item in history.get("items") or []
    )
    return ChangeEvent(created=history.get("created"), items=items)


def map_item(raw: dict[str, Any]) -> Item:
    fields = raw.get("fields") or {}
    labels = tuple(label for label in fields.get("labels") or [] if label)
    work_type = _option_value(fields.get(FIELD_IDS["work_type"])) or work_type_from_labels(labels)
    histories = (raw.get("changelog") or {}).get("histories") or []
    return Item(
        key=_text(raw.get("key")),
        summary=_text(fields.get("summary")),
        assignee=_text((fields.get("assignee") or {}).get("displayName")),
        status=clean_status_name((fields.get("status") or {}).get("name")),
        issuetype=_text((fields.get("issuetype") or {}).get("name")),
        work_type=work_type,
        asset_name=_option_value(fields.get(FIELD_IDS["asset_name"])),
        labels=labels,
        changelog=tuple(map_change_event(h) for h in histories),
    )


def map_items(raw_issues: Iterable[dict[str, Any]]) -> list[Item]:
    return [map_item(raw) for raw in raw_issues]
