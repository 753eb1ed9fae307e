"""Item, property and weighted-prize records parsed from config text.

Lists are written as ``a,b;c,d`` with ``;`` between entries and ``,`` between
fields.
"""

from __future__ import annotations

import random
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

SEMICOLON = ";"
COMMA = ","

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class DecodeError(ValueError):
    """Raised when config text does not have the expected shape."""


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


def _parse_float(text: str) -> float:
    """Parse a float, rejecting whitespace and digit separators."""
    if not text or text != text.strip() or "_" in text:
        raise DecodeError(f"invalid float: {text!r}")
    try:
        return float(text)
    except ValueError:
        raise DecodeError(f"invalid float: {text!r}") from None


def _entries(text: str) -> list[str]:
    """Split a ``;`` separated list, ignoring surrounding blanks and separators."""
    return text.strip().strip(SEMICOLON).split(SEMICOLON)


def _fields(entry: str) -> list[str]:
    return entry.strip().split(COMMA)


@dataclass
class ItemInfo:
    """An item id with a count."""

    item_id: int = 0
    count: int = 0

    @classmethod
    def parse(cls, text: str) -> "ItemInfo":
        """Parse ``id,count``; blank text gives an empty item."""
        if not text.strip():
            return cls()
        fields = text.split(COMMA)
        if len(fields) < 2:
            raise DecodeError(f"{text} 属性信息格式错误")
        return cls(_atoi_or_zero(fields[0]), _atoi_or_zero(fields[1]))


@dataclass
class ItemInfoPb:
    """An item id with its new count and the change that led to it."""

    item_id: int = 0
    count: int = 0
    delta: int = 0


@dataclass
class FloatItemInfo:
    """An item id with a fractional count."""

    item_id: int = 0
    count: float = 0.0


@dataclass
class ItemInfoProb:
    """An item id and count with a drawing weight."""

    item_id: int = 0
    count: int = 0
    prob: int = 0

    @classmethod
    def parse(cls, text: str) -> "ItemInfoProb":
        """Parse ``id,count,prob``; blank text gives an empty entry."""
        if not text.strip():
            return cls()
        fields = text.split(COMMA)
        if len(fields) < 3:
            raise DecodeError(f"{text} 属性信息格式错误")
        return cls(
            _atoi_or_zero(fields[0]),
            _atoi_or_zero(fields[1]),
            _atoi_or_zero(fields[2]),
        )

    def to_item_info(self) -> ItemInfo:
        """The item and count without the weight."""
        return ItemInfo(self.item_id, self.count)


@dataclass
class FloatItemProbInfo:
    """An item id and fractional count with a drawing weight."""

    item_id: int = 0
    count: float = 0.0
    prob: int = 0

    def to_item_info(self) -> "FloatItemProbInfo":
        """A copy of this entry."""
        return FloatItemProbInfo(self.item_id, self.count, self.prob)


@dataclass
class PropInfo:
    """An int key with an int value."""

    k: int = 0
    v: int = 0

    @classmethod
    def parse(cls, text: str) -> "PropInfo":
        """Parse ``key,value``; blank text gives an empty entry."""
        if not text.strip():
            return cls()
        fields = text.split(COMMA)
        if len(fields) < 2:
            raise DecodeError(f"{text} PropInfo 属性信息格式错误")
        return cls(_atoi_or_zero(fields[0]), _atoi_or_zero(fields[1]))


@dataclass
class PropGain:
    """A property bonus kept both as a float and truncated to an int."""

    type_id: int = 0
    float_value: float = 0.0
    int_value: int = 0

    @classmethod
    def parse(cls, text: str) -> "PropGain":
        """Parse ``type,value``; blank text gives an empty gain."""
        if not text.strip():
            return cls()
        fields = text.split(COMMA)
        if len(fields) < 2:
            raise DecodeError(f"{text} PropPlus 属性信息格式错误")
        type_id = _atoi(fields[0])
        value = _parse_float(fields[1])
        return cls(type_id, value, int(value))


def parse_item_infos(text: str) -> list[ItemInfo]:
    """Parse ``id,count;id,count``; a bad id gives 0, a bad count raises."""
    if not text:
        return []
    result = []
    for entry in _entries(text):
        fields = _fields(entry)
        if len(fields) < 2:
            raise DecodeError(f"{entry}物品信息格式错误")
        result.append(ItemInfo(_atoi_or_zero(fields[0]), _atoi(fields[1])))
    return result


def parse_float_item_infos(text: str) -> list[FloatItemInfo]:
    """Parse ``id,count;...`` with fractional counts."""
    if not text:
        return []
    result = []
    for entry in _entries(text):
        fields = _fields(entry)
        if len(fields) < 2:
            raise DecodeError(f"{entry}物品信息格式错误")
        result.append(FloatItemInfo(_atoi_or_zero(fields[0]), _parse_float(fields[1])))
    return result


def parse_prop_infos(text: str) -> list[PropInfo]:
    """Parse ``key,value;...``; both fields must be integers."""
    if not text:
        return []
    result = []
    for entry in _entries(text):
        fields = _fields(entry)
        if len(fields) < 2:
            raise DecodeError(f"{entry}属性信息格式错误")
        result.append(PropInfo(_atoi(fields[0]), _atoi(fields[1])))
    return result


def parse_prop_gains(text: str) -> list[PropGain]:
    """Parse ``type,value;...``; an empty entry gives an empty gain."""
    if not text:
        return []
    return [PropGain.parse(entry) for entry in _entries(text)]


def parse_item_info_probs(text: str) -> list[ItemInfoProb]:
    """Parse ``id,count,prob;...``; each entry must have exactly three fields.

    The id and weight must be integers; a bad count gives 0.
    """
    if not text:
        return []
    result = []
    for entry in _entries(text):
        fields = _fields(entry)
        if len(fields) != 3:
            raise DecodeError(f"{text} ProbItems属性信息格式错误")
        item_id = _atoi(fields[0])
        count = _atoi_or_zero(fields[1])
        prob = _atoi(fields[2])
        result.append(ItemInfoProb(item_id, count, prob))
    return result


def items_times(items: Iterable[ItemInfo], times: float) -> list[ItemInfo]:
    """Scale every count by ``times``, truncating and dropping counts below 1."""
    result = []
    for item in items:
        count = int(item.count * times)
        if count > 0:
            result.append(ItemInfo(item.item_id, count))
    return result


def items_to_map(items: Iterable[ItemInfo]) -> dict[int, int]:
    """Total count per item id."""
    totals: dict[int, int] = {}
    for item in items:
        totals[item.item_id] = totals.get(item.item_id, 0) + item.count
    return totals


def find_item(items: Iterable[ItemInfo], item_id: int) -> ItemInfo | None:
    """The first entry with ``item_id``, or None."""
    return next((item for item in items if item.item_id == item_id), None)


def _rng(rng: Any) -> Any:
    return rng if rng is not None else random


def rand_prop(props: Sequence[PropInfo], rng: Any = None) -> PropInfo:
    """Pick an entry using values as percentages; fall back to a uniform pick.

    ``rng`` needs a ``randrange`` method and defaults to the ``random`` module.
    """
    if not props:
        raise ValueError("cannot pick from an empty list")
    gen = _rng(rng)
    weight = gen.randrange(100)
    total = 0
    for prop in props:
        total += prop.v
        if weight < total:
            return prop
    return props[gen.randrange(len(props))]


def rand_unique_via_weight(
    probs: Sequence[ItemInfoProb], count: int, rng: Any = None
) -> list[ItemInfo]:
    """Draw ``count`` prizes by weight, removing each one once drawn."""
    gen = _rng(rng)
    pool = list(probs)
    total = sum(item.prob for item in pool)
    results: list[ItemInfo] = []
    for _ in range(count):
        if total <= 0:
            raise ValueError("total weight must be positive")
        target = gen.randrange(total)
        cumulative = 0
        for index, item in enumerate(pool):
            cumulative += item.prob
            if cumulative >= target:
                results.append(item.to_item_info())
                del pool[index]
                total -= item.prob
                break
    return results


def rand_unique_via_all_weight(
    probs: Sequence[ItemInfoProb], count: int, rng: Any = None
) -> list[ItemInfo]:
    """Draw ``count`` prizes by weight; a prize may be drawn more than once."""
    if count == 0:
        return []
    gen = _rng(rng)
    total = sum(item.prob for item in probs)
    results: list[ItemInfo] = []
    for _ in range(count):
        if total <= 0:
            raise ValueError("total weight must be positive")
        target = gen.randrange(total)
        cumulative = 0
        for item in probs:
            cumulative += item.prob
            if cumulative >= target:
                results.append(item.to_item_info())
                break
    return results