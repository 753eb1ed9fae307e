"""Assorted helpers: random picks, day arithmetic, addresses and JSON forms."""

from __future__ import annotations

import json
import random
import re
import socket
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

TEN_THOUSAND = 10000

_INT_RE = re.compile(r"[+-]?[0-9]+")
_PROBE_ADDRESS = ("192.0.2.1", 80)


def _rng(rng: Any) -> Any:
    return rng if rng is not None else random


def _div_trunc(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _int_or_zero(text: str) -> int:
    return int(text) if _INT_RE.fullmatch(text) else 0


def _as_text(data: bytes | str) -> str:
    return data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data


def rand_num(low: int, high: int, rng: Any = None) -> int:
    """A random integer in ``[low, high]``."""
    return low + _rng(rng).randrange(high - low + 1)


def sample(values: Sequence[int], rng: Any = None) -> int:
    """A random element; raises ValueError on an empty sequence."""
    if not values:
        raise ValueError("sample can't take empty array")
    return values[_rng(rng).randrange(len(values))]


def sample_or_zero(values: Sequence[int], rng: Any = None) -> int:
    """A random element, or 0 for an empty sequence."""
    if not values:
        return 0
    return values[_rng(rng).randrange(len(values))]


def zero_time_of_day(t: datetime) -> datetime:
    """Local midnight of the day of ``t``."""
    return datetime(t.year, t.month, t.day)


def time_sub_of_day(t: datetime, now: datetime | None = None) -> int:
    """Which day ``now`` is counted from ``t``, the day of ``t`` being day 1."""
    now = now if now is not None else datetime.now()
    hours = int((zero_time_of_day(now) - zero_time_of_day(t)).total_seconds() / 3600)
    return _div_trunc(hours, 24) + 1


def normalize_time_of_day(t: datetime, start_hour: int) -> datetime:
    """Start of the day containing ``t`` when days begin at ``start_hour``."""
    day = t - timedelta(days=1) if t.hour < start_hour else t
    return datetime(day.year, day.month, day.day, start_hour)


def diff_days(end: datetime, start: datetime) -> int:
    """Calendar days from ``start`` to ``end``."""
    return (zero_time_of_day(end) - zero_time_of_day(start)).days


def _header(headers: Mapping[str, str], name: str) -> str:
    lowered = name.lower()
    return next((v for k, v in headers.items() if k.lower() == lowered), "")


def get_ip_address(headers: Mapping[str, str], remote_addr: str) -> str:
    """Client address from forwarding headers, else the host part of ``remote_addr``."""
    forwarded = _header(headers, "X-Forwarded-For")
    if forwarded:
        for part in forwarded.split(","):
            ip = part.strip()
            if ip:
                return ip
    real_ip = _header(headers, "X-Real-Ip")
    if real_ip:
        return real_ip
    index = remote_addr.rfind(":")
    return remote_addr if index < 0 else remote_addr[:index]


def hit_rate_ten_thousand(rate: int, rng: Any = None) -> bool:
    """Whether a draw hits a chance of ``rate`` in ten thousand."""
    return _rng(rng).randrange(TEN_THOUSAND) < rate


def get_outbound_ip() -> str:
    """The local address used for outgoing traffic; raises RuntimeError on failure."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(_PROBE_ADDRESS)
            return sock.getsockname()[0]
    except OSError as exc:
        raise RuntimeError(f"can not get outbound ip {exc}") from exc


def get_tomorrow_stamp() -> datetime:
    """Local midnight at the start of tomorrow."""
    return zero_time_of_day(datetime.now() + timedelta(hours=24))


def sub_string(source: str, start: int, end: int) -> str:
    """Characters ``start`` to ``end`` of ``source``.

    Returns ``source`` when the range covers all of it, an empty string when
    ``start`` is negative or past ``end``, and raises IndexError when ``end``
    runs past the text.
    """
    if start == 0 and end >= len(source):
        return source
    if start < 0 or start > end:
        return ""
    if end > len(source):
        raise IndexError(f"end {end} out of range for length {len(source)}")
    return source[start:end]


def wait_write_timeout(target: Any, data: Any, timeout: float | timedelta) -> bool:
    """Put ``data`` into ``target`` in the background; True if that did not finish in time.

    The put keeps going after a timeout and completes once ``target`` has room.
    """
    if isinstance(timeout, timedelta):
        timeout = timeout.total_seconds()
    done = threading.Event()

    def send() -> None:
        target.put(data)
        done.set()

    threading.Thread(target=send, daemon=True).start()
    return not done.wait(timeout)


@dataclass
class PosInfo:
    """A position with a facing direction."""

    pos_x: int = 0
    pox_y: int = 0
    direct: int = 0

    def to_json(self) -> str:
        """JSON object text."""
        return json.dumps(
            {"PosX": self.pos_x, "PoxY": self.pox_y, "Direct": self.direct},
            separators=(",", ":"),
        )

    @classmethod
    def from_json(cls, raw: bytes | str) -> "PosInfo":
        """Parse JSON object text; raises ValueError if it is not valid."""
        obj = json.loads(_as_text(raw))
        if not isinstance(obj, dict):
            raise ValueError("PosInfo must be a JSON object")
        return cls(obj.get("PosX", 0), obj.get("PoxY", 0), obj.get("Direct", 0))


@dataclass
class ExploreItem:
    """An exploration in progress."""

    id: int = 0
    end_time: int = 0
    hero: int = 0
    worker_ids: list[int] = field(default_factory=list)
    tile_x: int = 0
    tile_y: int = 0
    build_id: int = 0


@dataclass
class RuinsItem:
    """A ruin with its explored areas."""

    id: int = 0
    areas: dict[int, int] = field(default_factory=dict)
    uid: int = 0


def int_kv_to_json(mapping: Mapping[int, int]) -> str:
    """JSON object text with the int keys written as strings."""
    return "{" + ",".join(f'"{k}":{v}' for k, v in mapping.items()) + "}"


def int_kv_from_json(data: bytes | str) -> dict[int, int]:
    """Parse a JSON object of ints; keys that are not integers become 0."""
    text = _as_text(data)
    if len(text.encode("utf-8")) <= 2:
        return {}
    obj = json.loads(text)
    if not isinstance(obj, dict):
        raise ValueError("expected a JSON object")
    result: dict[int, int] = {}
    for key, value in obj.items():
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"value for {key!r} is not an integer")
        result[_int_or_zero(key)] = value
    return result


def int_slice_to_json(values: Sequence[int]) -> str:
    """JSON array text."""
    return "[" + ",".join(str(v) for v in values) + "]"


def int_slice_from_json(data: bytes | str) -> list[int]:
    """Parse ``[a,b,...]``; entries that are not integers become 0."""
    text = _as_text(data)
    if len(text.encode("utf-8")) <= 2:
        return []
    return [_int_or_zero(part.strip()) for part in text[1:-1].split(",")]