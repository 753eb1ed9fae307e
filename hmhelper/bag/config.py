"""Bag configuration tables and the records bags hand back."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from hmhelper.common.items import ItemInfo, PropInfo, parse_prop_infos

log = logging.getLogger(__name__)

BAG_KEY_GOLD = "金币背包"
BAG_KEY_BASE = "普通背包"

DEFAULT_MAX_GOLDS = "1,3000;2,1100;3,1100"


class ItemTypeEnum(IntEnum):
    """Items whose ids the bags need to know."""

    GOLD = 1


_item_ids: dict[ItemTypeEnum, int] = {kind: int(kind) for kind in ItemTypeEnum}


def item_type_id(kind: ItemTypeEnum) -> int:
    """The item id currently used for ``kind``."""
    return _item_ids[kind]


def set_count_item(kind: ItemTypeEnum, new_id: int) -> None:
    """Use ``new_id`` as the item id for ``kind``, for when the default clashes."""
    if kind in _item_ids:
        _item_ids[kind] = new_id


@dataclass
class ItemCfg:
    """One row of the item table."""

    id: int = 0
    bag_key: str = ""
    item_type: int = 0
    sub_type: int = 0
    max_num: int = 0
    info: str = ""
    change_param: str = ""
    name: str = ""
    title_bage: int = 0
    icon: str = ""
    color: int = 0
    can_sell: bool = False
    sell_get: list[ItemInfo] = field(default_factory=list)
    drop_id: str = ""
    price: float = 0.0


@dataclass
class GoldLogCfg:
    """One row of the gold log table."""

    id: int = 0
    center_key: str = ""
    client_key: str = ""
    is_daily: bool = False


@dataclass
class HelperConf:
    """Global settings for the bags."""

    max_golds: list[PropInfo] = field(
        default_factory=lambda: parse_prop_infos(DEFAULT_MAX_GOLDS)
    )

    def max_gold_by_day_num(self, day_num: int) -> int:
        """Daily gold limit for a user on day ``day_num`` since registering."""
        result = 0
        for prop in self.max_golds:
            if day_num >= prop.k:
                result = prop.v
        return result


@dataclass
class ResultItem:
    """The outcome of a change to one item."""

    item_id: int = 0
    num: int = 0
    delta: int = 0


def _encode(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return vars(obj)


@dataclass
class BagExItemData:
    """Item instances keyed by uid; each instance has ``uid`` and ``item_id``."""

    data: dict[int, Any] = field(default_factory=dict)

    def count_by_item_id(self, item_id: int) -> int:
        """How many instances are of ``item_id``."""
        return sum(1 for item in self.data.values() if item.item_id == item_id)

    def to_json(self) -> str:
        """JSON object text keyed by uid; empty text if an instance cannot be encoded."""
        try:
            return json.dumps(self.data, default=_encode, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            log.error("BagExItemData.to_json %s", exc)
            return ""

    def count(self) -> int:
        """Number of instances."""
        return len(self.data)

    def clear(self) -> None:
        """Remove every instance."""
        self.data = {}

    def remove(self, uid: int) -> Any:
        """The instance under ``uid``, or None; the entry is left in place."""
        return self.data.get(uid)

    def update(self, item: Any) -> None:
        """Store ``item`` under its uid."""
        self.data[item.uid] = item