# src/staffing/windows.py
from __future__ import annotations

from datetime import time
from enum import Enum
from typing import Union

TimeLike = Union[str, time, int]

MINUTES_PER_DAY = 24 * 60
SECONDS_PER_DAY = MINUTES_PER_DAY * 60


class ZeroLengthPolicy(Enum):
    """How a window with ``start == end`` is interpreted."""

    FULL_DAY = "full_day"
    EMPTY = "empty"


def to_seconds(value: TimeLike) -> int:
    """
    Convert a time-of-day value to seconds since midnight (0-86399).

    Accepts "HH:MM:SS" / "HH:MM" strings, ``datetime.time`` and int minutes
    since midnight. Windows are compared at this resolution.
    """
    if isinstance(value, bool):
        raise TypeError("Time-of-day values must be str, datetime.time or int.")
    if isinstance(value, time):
        return value.hour * 3600 + value.minute * 60 + value.second
    if isinstance(value, int):
        if not (0 <= value < MINUTES_PER_DAY):
            raise ValueError(f"Minutes since midnight out of range: {value}")
        return value * 60
    if not isinstance(value, str):
        raise TypeError(
            "Time-of-day values must be str, datetime.time or int; "
            f"got {type(value)!r}"
        )

    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time-of-day string: {value!r}")
    try:
        hh, mm = int(parts[0]), int(parts[1])
        ss = int(parts[2]) if len(parts) == 3 else 0
    except ValueError as exc:
        raise ValueError(f"Invalid time-of-day string: {value!r}") from exc
    if not (0 <= hh <= 23 and 0 <= mm <= 59 and 0 <= ss <= 59):
        raise ValueError(f"Time-of-day out of range: {value!r}")
    return hh * 3600 + mm * 60 + ss


def to_minutes(value: TimeLike) -> int:
    """Whole minutes since midnight; seconds are dropped."""
    return to_seconds(value) // 60


def format_time_of_day(minutes: int) -> str:
    """Render minutes since midnight as a zero-padded "HH:MM:SS" string."""
    minutes = int(minutes) % MINUTES_PER_DAY
    hh, mm = divmod(minutes, 60)
    return f"{hh:02d}:{mm:02d}:00"


def normalize_time(value: TimeLike) -> str:
    """Normalise any accepted time-of-day value to "HH:MM:SS"."""
    if isinstance(value, str):
        to_seconds(value)
        parts = value.strip().split(":")
        if len(parts) == 2:
            parts.append("00")
        return ":".join(p.zfill(2) for p in parts)
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    return format_time_of_day(to_minutes(value))


def crosses_midnight(start: TimeLike, end: TimeLike) -> bool:
    return to_seconds(end) < to_seconds(start)


def _segments(
    start: TimeLike, end: TimeLike, policy: ZeroLengthPolicy
) -> list[tuple[int, int]]:
    """
    Split [start, end) into non-wrapping half-open segments, in seconds on
    the 24h clock.

    A wrapping window becomes [start, 24:00) plus [00:00, end); empty segments
    are dropped.
    """
    s, e = to_seconds(start), to_seconds(end)
    if s == e:
        return [(0, SECONDS_PER_DAY)] if policy is ZeroLengthPolicy.FULL_DAY else []
    if s < e:
        return [(s, e)]
    return [seg for seg in ((s, SECONDS_PER_DAY), (0, e)) if seg[0] < seg[1]]


def window_seconds(
    start: TimeLike,
    end: TimeLike,
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> int:
    """Length of the window in seconds, wrap-aware."""
    return sum(b - a for a, b in _segments(start, end, policy))


def window_minutes(
    start: TimeLike,
    end: TimeLike,
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> float:
    return window_seconds(start, end, policy=policy) / 60.0


def is_time_between(
    t: TimeLike,
    start: TimeLike,
    end: TimeLike,
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> bool:
    """
    True if point ``t`` lies inside [start, end).

    When ``end < start`` the window wraps midnight and ``t`` is inside iff
    ``t >= start or t < end``.
    """
    ts, s, e = to_seconds(t), to_seconds(start), to_seconds(end)
    if s == e:
        return policy is ZeroLengthPolicy.FULL_DAY
    if e < s:
        return ts >= s or ts < e
    return s <= ts < e


def intervals_overlap(
    a_start: TimeLike,
    a_end: TimeLike,
    b_start: TimeLike,
    b_end: TimeLike,
    *,
    policy: ZeroLengthPolicy = ZeroLengthPolicy.FULL_DAY,
) -> bool:
    """
    Decide whether two time-of-day windows intersect.

    Both windows are half-open, so ``a_end == b_start`` is not an overlap.
    Either window may cross midnight.
    """
    a_segs = _segments(a_start, a_end, policy)
    b_segs = _segments(b_start, b_end, policy)
    return any(a0 < b1 and b0 < a1 for a0, a1 in a_segs for b0, b1 in b_segs)
