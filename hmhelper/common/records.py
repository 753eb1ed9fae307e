"""Wave, condition and date-time records parsed from config text."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from hmhelper.common.items import DecodeError, ItemInfo

SEMICOLON = ";"
COMMA = ","
COLON = ":"
SPACE = " "
HLINE = "-"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _atoi(text: str) -> int:
    """Parse a signed decimal integer strictly."""
    if not _INT_RE.fullmatch(text):
        raise DecodeError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise DecodeError(f"integer out of range: {text!r}")
    return value


def _atoi_or_zero(text: str) -> int:
    """Parse a signed decimal integer; bad text gives 0, overflow is clamped."""
    if not _INT_RE.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def _int_list(text: str, sep: str) -> list[int]:
    """Split ``text`` on ``sep`` into ints; empty fields become 0."""
    if not text:
        return []
    return [_atoi(part) if part else 0 for part in text.split(sep)]


def _entries(text: str) -> list[str]:
    """Split a ``;`` separated list, ignoring surrounding blanks and separators."""
    return text.strip().strip(SEMICOLON).split(SEMICOLON)


@dataclass
class WaveItem:
    """An item dropped in a given wave."""

    wave: int = 0
    item_id: int = 0
    count: int = 0

    @classmethod
    def parse(cls, text: str) -> "WaveItem":
        """Parse ``wave,id,count``; extra fields are ignored."""
        try:
            values = _int_list(text.strip(), COMMA)
        except DecodeError as exc:
            raise DecodeError(f"WaveItem:Decode bad str:{text},err:{exc}") from exc
        if len(values) < 3:
            raise DecodeError(f"WaveItem:Decode bad str:{text},err:<nil>")
        return cls(values[0], values[1], values[2])


@dataclass
class Condition:
    """A key/value requirement with optional sub-requirements."""

    k: int = 0
    v: int = 0
    subs: dict[int, int] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> "Condition":
        """Parse ``key,value[,subkey,subvalue...]``; blank text gives an empty condition."""
        if not text.strip():
            return cls()
        return new_condition(_int_list(text, COMMA))

    def clone(self) -> "Condition":
        """A deep copy."""
        return Condition(self.k, self.v, dict(self.subs))


def new_condition(values: Iterable[int]) -> Condition:
    """Build a condition from a flat list; fewer than two values give an empty one."""
    values = list(values)
    if len(values) < 2:
        return Condition()
    k, v, *rest = values
    if rest and len(values) % 2 != 0:
        raise DecodeError("condition 长度必须是偶数")
    subs = dict(zip(rest[::2], rest[1::2]))
    return Condition(k, v, subs)


def parse_int_map(text: str) -> dict[int, int]:
    """Parse ``key,value;...`` into a dict; keys must not repeat."""
    if not text.strip():
        return {}
    result: dict[int, int] = {}
    for entry in _entries(text):
        fields = entry.strip().split(COMMA)
        if len(fields) != 2:
            raise DecodeError(f"{entry}IntMap 属性信息格式错误")
        key = _atoi(fields[0])
        if key in result:
            raise DecodeError(f"{entry}IntMap 属性重复")
        result[key] = _atoi(fields[1])
    return result


def parse_wave_items(text: str) -> list[WaveItem]:
    """Parse ``wave,id,count;...``."""
    if not text:
        return []
    return [WaveItem.parse(entry) for entry in _entries(text)]


def parse_conditions(text: str) -> list[Condition]:
    """Parse ``;`` separated conditions."""
    if not text:
        return []
    return [Condition.parse(entry) for entry in _entries(text)]


def clone_conditions(conditions: Iterable[Condition]) -> list[Condition]:
    """Deep copies of ``conditions``."""
    return [c.clone() for c in conditions]


def clone_and_add(conditions: Iterable[Condition], mapping: Mapping[int, int]) -> list[Condition]:
    """Copies whose values are raised by ``mapping[key]`` and lowered by one."""
    result = clone_conditions(conditions)
    for c in result:
        c.v += mapping.get(c.k, 0) - 1
    return result


@dataclass
class DateTime:
    """A local calendar date and time given field by field."""

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __str__(self) -> str:
        return (
            f"{self.year}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )

    @classmethod
    def parse(cls, text: str) -> "DateTime":
        """Parse ``YYYY-MM-DD HH:MM:SS``; blank text gives an empty value."""
        if not text.strip():
            return cls()
        parts = text.strip().split(SPACE)
        if len(parts) < 2:
            raise DecodeError(f"{text} DateTime 属性信息格式错误")
        left = parts[0].strip().split(HLINE)
        if len(left) < 3:
            raise DecodeError(f"{text} DateTime 属性格式错误")
        right = parts[1].strip().split(COLON)
        if len(right) < 3:
            raise DecodeError(f"{text} DateTime 属性信息格式错误")
        year, month, day = (_atoi_or_zero(x) for x in left[:3])
        hour, minute, second = (_atoi_or_zero(x) for x in right[:3])
        return cls(year, month, day, hour, minute, second)

    def to_datetime(self) -> datetime:
        """Local naive datetime; out-of-range fields carry over into larger ones."""
        year, month0 = divmod(self.year * 12 + self.month - 1, 12)
        base = datetime(year, month0 + 1, 1)
        return base + timedelta(
            days=self.day - 1, hours=self.hour, minutes=self.minute, seconds=self.second
        )

    def unix(self) -> int:
        """Unix timestamp; 0 when the month is unset."""
        if self.month == 0:
            return 0
        return math.floor(self.to_datetime().timestamp())


@dataclass
class DragonEnhanceCost:
    """Enhancement settings shown to the client."""

    ratio: float = 0.0
    plus: int = 0
    cost: ItemInfo = field(default_factory=ItemInfo)