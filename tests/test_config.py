import json
from dataclasses import dataclass

from hmhelper.bag.config import (
    BagExItemData,
    GoldLogCfg,
    HelperConf,
    ItemCfg,
    ItemTypeEnum,
    ResultItem,
    item_type_id,
    set_count_item,
)
from hmhelper.common.items import PropInfo


@dataclass
class _Thing:
    uid: int
    item_id: int


def test_gold_item_id_default():
    assert item_type_id(ItemTypeEnum.GOLD) == 1


def test_set_count_item_changes_id():
    original = item_type_id(ItemTypeEnum.GOLD)
    try:
        set_count_item(ItemTypeEnum.GOLD, 77)
        assert item_type_id(ItemTypeEnum.GOLD) == 77
    finally:
        set_count_item(ItemTypeEnum.GOLD, original)
    assert item_type_id(ItemTypeEnum.GOLD) == original


def test_default_max_golds():
    conf = HelperConf()
    assert conf.max_gold_by_day_num(1) == 3000
    assert conf.max_gold_by_day_num(2) == 1100
    assert conf.max_gold_by_day_num(30) == 1100


def test_max_gold_before_first_day_is_zero():
    assert HelperConf().max_gold_by_day_num(0) == 0


def test_custom_max_golds():
    conf = HelperConf([PropInfo(1, 50), PropInfo(4, 20)])
    assert conf.max_gold_by_day_num(3) == 50
    assert conf.max_gold_by_day_num(4) == 20


def test_item_cfg_defaults_have_no_limit():
    cfg = ItemCfg(id=5, name="gem")
    assert cfg.max_num == 0
    assert cfg.sell_get == []


def test_gold_log_cfg_fields():
    cfg = GoldLogCfg(3, "center", "client", True)
    assert (cfg.center_key, cfg.is_daily) == ("center", True)


def test_result_item_fields():
    res = ResultItem(item_id=2, num=9, delta=4)
    assert (res.item_id, res.num, res.delta) == (2, 9, 4)


def test_ex_item_data_counts():
    data = BagExItemData()
    for thing in (_Thing(1, 10), _Thing(2, 10), _Thing(3, 20)):
        data.update(thing)
    assert data.count() == 3
    assert data.count_by_item_id(10) == 2
    assert data.count_by_item_id(99) == 0


def test_ex_item_data_remove_keeps_entry():
    thing = _Thing(1, 10)
    data = BagExItemData()
    data.update(thing)
    assert data.remove(1) is thing
    assert data.remove(2) is None
    assert 1 in data.data


def test_ex_item_data_clear():
    data = BagExItemData()
    data.update(_Thing(1, 10))
    data.clear()
    assert data.count() == 0


def test_ex_item_data_to_json():
    data = BagExItemData()
    data.update(_Thing(4, 10))
    assert json.loads(data.to_json()) == {"4": {"uid": 4, "item_id": 10}}


def test_ex_item_data_to_json_unencodable_is_empty():
    data = BagExItemData({1: object()})
    assert data.to_json() == ""