"""Decoder for the Insight ``InsightParams`` telemetry string.

The device answers GetInsightParams with ten pipe-separated tokens::

    state|last_change|on_seconds|on_today|on_two_weeks|window|avg_w|current_mw|today_mw_min|two_weeks_mw_min

Scaling is fixed by the device family: current power arrives in mW, the
energy counters in mW-minutes. Every numeric token is parsed on its own, so a
garbled token only zeroes its own field.
"""
import logging
import math
import re
import struct
from typing import Any, Dict, Optional

from wemo_agent.domain.telemetry.insight import (
    INSIGHT_FIELD_COUNT,
    INSIGHT_WINDOW_SECONDS,
    TelemetrySnapshot,
)

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def _parse_int(token: str) -> Optional[int]:
    if not _INT_RE.fullmatch(token):
        return None
    value = int(token)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _parse_float(token: str) -> Optional[float]:
    if not token or token != token.strip() or "_" in token:
        return None
    try:
        # two-weeks energy is a single-precision value; out of float32 range means no data
        value = struct.unpack("f", struct.pack("f", float(token)))[0]
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_insight_params(raw: str) -> TelemetrySnapshot:
    tokens = raw.split("|")
    if len(tokens) < INSIGHT_FIELD_COUNT:
        return TelemetrySnapshot()

    fields: Dict[str, Any] = {"state": tokens[0] == "1"}

    for index, name in (
        (1, "last_change"),
        (2, "on_seconds"),
        (3, "on_seconds_today"),
        (4, "on_seconds_two_weeks"),
    ):
        value = _parse_int(tokens[index])
        if value is not None:
            fields[name] = value

    window = _parse_int(tokens[5])
    if window != INSIGHT_WINDOW_SECONDS:
        logger.debug(f"Unexpected Insight averaging window {tokens[5]!r}, expected {INSIGHT_WINDOW_SECONDS}")

    average = _parse_int(tokens[6])
    if average is not None:
        fields["average_watt"] = float(average)

    current = _parse_int(tokens[7])
    if current is not None:
        fields["current_w"] = current / 1000

    today = _parse_int(tokens[8])
    if today is not None:
        fields["energy_today"] = today / 1000 / 60

    two_weeks = _parse_float(tokens[9])
    if two_weeks is not None:
        fields["energy_two_weeks"] = two_weeks / 1000 / 60

    return TelemetrySnapshot(**fields)
