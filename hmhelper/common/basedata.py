"""Item id to count storage kept as ``id,count;id,count`` text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from hmhelper.common.items import ItemInfo

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _int_or_zero(text: str) -> int:
    text = text.strip()
    return int(text) if _INT_RE.fullmatch(text) else 0


@dataclass
class BaseData:
    """Counts per item id; ids whose count drops to zero or below are removed."""

    data: dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_string(cls, text: str) -> "BaseData":
        """Parse ``id,count;id,count``; empty text or ``"0"`` gives an empty store.

        Fields that are not integers count as 0. Raises ValueError when the
        fields do not come in pairs.
        """
        result = cls()
        if text in ("", "0"):
            return result
        values = [_int_or_zero(part) for part in text.replace(",", ";").split(";")]
        if len(values) % 2:
            raise ValueError(f"unpaired id and count in {text!r}")
        result.data = dict(zip(values[::2], values[1::2]))
        return result

    def clone(self) -> "BaseData":
        """An independent copy."""
        return BaseData(dict(self.data))

    def update(self, key: int, num: int) -> None:
        """Add ``num`` to the count of ``key``, dropping it when it reaches zero or below."""
        total = self.data.get(key, 0) + num
        if total > 0:
            self.data[key] = total
        else:
            self.data.pop(key, None)

    def update_batch(self, added: "BaseData | None", removed: "BaseData | None") -> None:
        """Subtract every count of ``removed``, then add every count of ``added``."""
        if removed is not None:
            for key, num in removed.data.items():
                self.update(key, -num)
        if added is not None:
            for key, num in added.data.items():
                self.update(key, num)

    def get(self, key: int) -> int:
        """The count of ``key``, 0 when absent."""
        return self.data.get(key, 0)

    def to_string(self) -> str:
        """The ``id,count;id,count`` text form."""
        return ";".join(f"{k},{v}" for k, v in self.data.items())

    def count(self) -> int:
        """The sum of all counts."""
        return sum(self.data.values())

    def max_item(self) -> tuple[int, int]:
        """The id with the largest positive count and that count, or ``(0, 0)``."""
        key, num = 0, 0
        for k, n in self.data.items():
            if n > num:
                key, num = k, n
        return key, num

    def clear(self) -> None:
        """Remove every entry."""
        self.data = {}

    def to_item_infos(self) -> list[ItemInfo]:
        """One ItemInfo per stored id."""
        return [ItemInfo(k, n) for k, n in self.data.items()]