"""Manual hour adjustments supplied as a JSON object (issue key -> hours)."""

from __future__ import annotations

import json
from numbers import Real

from .errors import OverridePayloadError


def parse_overrides(payload: str | None) -> dict[str, float]:
    """Decode ``'{"ISSUE-1": 6, "ISSUE-2": 36}'`` into a key -> hours mapping.

    A blank payload means no adjustments.

    Raises
    ------
    OverridePayloadError
        If the payload is not a JSON object of numbers.
    """
    if payload is None or not payload.strip():
        return {}
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise OverridePayloadError(f"error parsing manual adjustments JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise OverridePayloadError("error parsing manual adjustments JSON: expected an object of issue keys")
    adjustments: dict[str, float] = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, Real):
            raise OverridePayloadError(
                f"error parsing manual adjustments JSON: hours for {key} must be a number"
            )
        adjustments[str(key)] = float(value)
    return adjustments
