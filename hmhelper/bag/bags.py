"""Bag interfaces and the two stock bags: counted items and items with uids."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from hmhelper.bag.config import ItemCfg, ResultItem
from hmhelper.common.basedata import BaseData
from hmhelper.common.items import ItemInfo

log = logging.getLogger(__name__)


class BagExItem(Protocol):
    """An item instance stored under its own uid."""

    item_id: int
    uid: int


class Bag(Protocol):
    """A store that items can be added to."""

    def add_item(
        self, cf: ItemCfg | None, item_id: int, num: int, log_type: int
    ) -> tuple[Any, list[ItemInfo] | None]:
        """Add items; returns what was added and anything to add elsewhere instead."""
        ...


class BagByItem(Bag, Protocol):
    """A bag that keeps counts per item id."""

    def del_item_by_id(self, cf: ItemCfg | None, item_id: int, num: int, log_type: int) -> ResultItem:
        """Remove ``num`` of ``item_id``."""
        ...

    def check_item(self, item_id: int, num: int) -> bool:
        """Whether at least ``num`` of ``item_id`` are held."""
        ...

    def get_item_num(self, item_id: int) -> int:
        """How many of ``item_id`` are held."""
        ...


class BagByEx(Bag, Protocol):
    """A bag of item instances keyed by uid."""

    def del_item_by_uid(self, uid: int, log_type: int) -> BagExItem | None:
        """Remove and return the instance under ``uid``."""
        ...


class BagUser(Protocol):
    """A user that owns bags by name."""

    def get_bag(self, key: str) -> Bag | None:
        """The bag called ``key``, or None."""
        ...


def _lookup(configs: Mapping[int, ItemCfg], cf: ItemCfg | None, item_id: int) -> ItemCfg:
    if cf is not None:
        return cf
    try:
        return configs[item_id]
    except KeyError:
        raise KeyError(f"no item config for item {item_id}") from None


@dataclass
class BaseBag:
    """Counts per item id, with an optional limit on the total."""

    items: BaseData = field(default_factory=BaseData)
    total_max: int = -1
    curr_num: int = 0
    item_configs: Mapping[int, ItemCfg] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._recount()

    def _recount(self) -> None:
        if self.total_max > 0:
            self.curr_num = self.items.count()

    def set_total_max(self, total_max: int) -> None:
        """Set the limit on the total and recount the current total."""
        self.total_max = total_max
        self._recount()

    def to_db(self) -> bytes:
        """The ``id,count;...`` text for storage."""
        return self.items.to_string().encode("utf-8")

    def scan(self, raw: bytes | str | None) -> None:
        """Load items from a stored column; other values leave the items alone."""
        if isinstance(raw, (bytes, bytearray)):
            self.items = BaseData.from_string(bytes(raw).decode("utf-8"))
        elif isinstance(raw, str):
            self.items = BaseData.from_string(raw)
        self._recount()

    def to_json(self) -> str:
        """The item text as a JSON string."""
        return '"' + self.items.to_string() + '"'

    def load_json(self, data: bytes | str) -> None:
        """Load items from a JSON string of item text."""
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        self.items = BaseData.from_string(text.replace('"', ""))
        self._recount()

    def add_item(
        self, cf: ItemCfg | None, item_id: int, num: int, log_type: int
    ) -> tuple[ResultItem, None]:
        """Add ``num`` of ``item_id``, capped by the item's limit."""
        cf = _lookup(self.item_configs, cf, item_id)
        result = ResultItem(item_id=item_id, num=self.items.get(item_id))
        if self.total_max > 0 and self.curr_num + num > self.total_max:
            num = cf.max_num - result.num
        if cf.max_num > 0 and result.num + num > cf.max_num:
            num = cf.max_num - result.num
        result.delta = num
        self.items.update(item_id, num)
        result.num += num
        return result, None

    def del_item_by_id(self, cf: ItemCfg | None, item_id: int, num: int, log_type: int) -> ResultItem:
        """Remove ``num`` of ``item_id``."""
        result = ResultItem(item_id=item_id, num=self.items.get(item_id), delta=-num)
        self.items.update(item_id, -num)
        result.num -= num
        return result

    def check_item(self, item_id: int, num: int) -> bool:
        """Whether at least ``num`` of ``item_id`` are held."""
        return self.items.get(item_id) >= num

    def surplus_num(self) -> int:
        """Room left under the total limit."""
        return self.total_max - self.curr_num

    def get_item_num(self, item_id: int) -> int:
        """How many of ``item_id`` are held."""
        return self.items.get(item_id)


def _encode_item(item: Any) -> Any:
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.asdict(item)
    return vars(item)


NewBagExItem = Callable[[int, ItemCfg], BagExItem]
ExistChange = Callable[[ItemCfg, BagExItem], "list[ItemInfo] | None"]


@dataclass
class ExBag:
    """Item instances keyed by uid, with uids handed out in increasing order."""

    items: dict[int, BagExItem] = field(default_factory=dict)
    max_uid: int = 0
    new_item: NewBagExItem | None = field(default=None, repr=False, compare=False)
    exist_change: ExistChange | None = field(default=None, repr=False, compare=False)
    item_configs: Mapping[int, ItemCfg] = field(default_factory=dict, repr=False, compare=False)
    tmp_json: bytes | None = field(default=None, repr=False, compare=False)

    def to_db(self) -> bytes:
        """JSON object of the instances keyed by uid."""
        payload = {str(uid): _encode_item(item) for uid, item in self.items.items()}
        return json.dumps(
            payload, sort_keys=True, ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")

    def scan(self, raw: bytes | str | None) -> None:
        """Keep a stored column until ``load_items`` decodes it."""
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        if isinstance(raw, (bytes, bytearray)):
            self.tmp_json = bytes(raw) if raw else b"{}"

    def load_items(self, loader: Callable[[bytes | None], dict[int, BagExItem]]) -> None:
        """Decode the kept column with ``loader`` and use the result as the items."""
        self.items = loader(self.tmp_json)
        self.tmp_json = None

    def add_item(
        self, cf: ItemCfg | None, item_id: int, num: int, log_type: int
    ) -> tuple[BagExItem | None, list[ItemInfo] | None]:
        """Create one instance; if its uid is taken, hand it to the exist-change hook."""
        cf = _lookup(self.item_configs, cf, item_id)
        if self.new_item is None:
            raise RuntimeError("bag has no item factory")
        log.debug("ExBag.add_item %r %r", self, cf)
        item = self.new_item(self.max_uid + 1, cf)
        if item.uid in self.items:
            if self.exist_change is None:
                raise RuntimeError("bag has no handler for existing uids")
            return None, self.exist_change(cf, item)
        self.items[item.uid] = item
        self.max_uid = item.uid
        return item, None

    def del_item_by_uid(self, uid: int, log_type: int) -> BagExItem | None:
        """Remove and return the instance under ``uid``, or None."""
        return self.items.pop(uid, None)

    def get_item_by_uid(self, uid: int) -> BagExItem | None:
        """The instance under ``uid``, or None."""
        return self.items.get(uid)