import pytest

from hmhelper.common.basedata import BaseData
from hmhelper.common.items import ItemInfo


@pytest.mark.parametrize("text", ["", "0"])
def test_empty_text_gives_empty_store(text):
    assert BaseData.from_string(text).data == {}


def test_parse_pairs():
    assert BaseData.from_string("1,5;2,7").data == {1: 5, 2: 7}


def test_parse_accepts_all_commas():
    assert BaseData.from_string("1,5,2,7").data == {1: 5, 2: 7}


def test_unpaired_fields_raise():
    with pytest.raises(ValueError):
        BaseData.from_string("1,5;2")


def test_string_round_trip():
    bd = BaseData({3: 9, 4: 1, 10: 200})
    assert BaseData.from_string(bd.to_string()).data == bd.data


def test_update_adds_and_removes():
    bd = BaseData.from_string("1,5;2,7")
    bd.update(1, 3)
    assert bd.get(1) == 8
    bd.update(2, -7)
    assert 2 not in bd.data
    bd.update(9, -1)
    assert 9 not in bd.data


def test_get_missing_is_zero():
    assert BaseData().get(42) == 0


def test_update_batch_removes_then_adds():
    bd = BaseData({1: 5})
    bd.update_batch(BaseData({1: 2}), BaseData({1: 5}))
    assert bd.data == {1: 2}


def test_update_batch_accepts_none():
    bd = BaseData({1: 5})
    bd.update_batch(None, None)
    assert bd.data == {1: 5}


def test_count_sums_values():
    assert BaseData.from_string("1,5;2,7").count() == 12


def test_max_item():
    assert BaseData.from_string("1,5;2,7").max_item() == (2, 7)
    assert BaseData().max_item() == (0, 0)


def test_clone_is_independent():
    bd = BaseData({1: 5})
    copy = bd.clone()
    copy.update(1, 1)
    assert bd.get(1) == 5
    assert copy.get(1) == 6


def test_clear():
    bd = BaseData({1: 5})
    bd.clear()
    assert bd.data == {}


def test_to_item_infos():
    infos = BaseData({1: 5, 2: 7}).to_item_infos()
    assert sorted(infos, key=lambda i: i.item_id) == [ItemInfo(1, 5), ItemInfo(2, 7)]