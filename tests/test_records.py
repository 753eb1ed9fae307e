import math
from datetime import datetime

import pytest

from hmhelper.common.items import DecodeError
from hmhelper.common.records import (
    Condition,
    DateTime,
    DragonEnhanceCost,
    WaveItem,
    clone_and_add,
    clone_conditions,
    new_condition,
    parse_conditions,
    parse_int_map,
    parse_wave_items,
)


def test_wave_item_parse():
    assert WaveItem.parse(" 1,2,3 ") == WaveItem(1, 2, 3)


def test_wave_item_parse_extra_fields_ignored():
    assert WaveItem.parse("4,5,6,7") == WaveItem(4, 5, 6)


@pytest.mark.parametrize("text", ["1,2", "", "a,b,c"])
def test_wave_item_parse_errors(text):
    with pytest.raises(DecodeError):
        WaveItem.parse(text)


def test_parse_wave_items():
    assert parse_wave_items("1,2,3;4,5,6;") == [WaveItem(1, 2, 3), WaveItem(4, 5, 6)]
    assert parse_wave_items("") == []


def test_parse_wave_items_bad_entry():
    with pytest.raises(DecodeError):
        parse_wave_items("1,2,3;4,5")


def test_new_condition_with_subs():
    c = new_condition([1, 2, 3, 4, 5, 6])
    assert (c.k, c.v) == (1, 2)
    assert c.subs == {3: 4, 5: 6}


def test_new_condition_short_is_empty():
    assert new_condition([7]) == Condition()


def test_new_condition_odd_length():
    with pytest.raises(DecodeError):
        new_condition([1, 2, 3])


def test_condition_parse():
    assert Condition.parse("10,20") == Condition(10, 20, {})
    assert Condition.parse("   ") == Condition()


def test_condition_parse_bad_number():
    with pytest.raises(DecodeError):
        Condition.parse("1,x")


def test_condition_clone_is_independent():
    original = Condition(1, 2, {3: 4})
    copy = original.clone()
    copy.subs[3] = 99
    copy.v = 50
    assert original == Condition(1, 2, {3: 4})


def test_parse_conditions():
    result = parse_conditions("1,2;3,4,5,6")
    assert result == [Condition(1, 2, {}), Condition(3, 4, {5: 6})]
    assert parse_conditions("") == []


def test_clone_conditions_deep():
    originals = [Condition(1, 2, {5: 6})]
    copies = clone_conditions(originals)
    copies[0].subs[5] = 0
    assert copies == [Condition(1, 2, {5: 0})]
    assert originals == [Condition(1, 2, {5: 6})]


def test_clone_and_add():
    originals = [Condition(1, 10), Condition(2, 20)]
    result = clone_and_add(originals, {1: 5})
    assert [c.v for c in result] == [10 + 5 - 1, 20 - 1]
    assert [c.v for c in originals] == [10, 20]


def test_parse_int_map():
    assert parse_int_map("1,2;3,4;") == {1: 2, 3: 4}
    assert parse_int_map("  ") == {}


@pytest.mark.parametrize("text", ["1,2;1,3", "1,2,3", "a,1", "1, 2", ";"])
def test_parse_int_map_errors(text):
    with pytest.raises(DecodeError):
        parse_int_map(text)


def test_datetime_round_trip():
    text = "2020-01-02 03:04:05"
    dt = DateTime.parse(text)
    assert dt == DateTime(2020, 1, 2, 3, 4, 5)
    assert str(dt) == text


def test_datetime_parse_blank():
    assert DateTime.parse("") == DateTime()


@pytest.mark.parametrize("text", ["2020-01-02", "2020-01 03:04:05", "2020-01-02 03:04"])
def test_datetime_parse_errors(text):
    with pytest.raises(DecodeError):
        DateTime.parse(text)


def test_datetime_to_datetime_and_unix():
    dt = DateTime(2021, 6, 15, 12, 30, 45)
    expected = datetime(2021, 6, 15, 12, 30, 45)
    assert dt.to_datetime() == expected
    assert dt.unix() == math.floor(expected.timestamp())


def test_datetime_normalizes_overflow():
    assert DateTime(2020, 13, 1).to_datetime() == datetime(2021, 1, 1)


def test_datetime_unix_zero_month():
    assert DateTime(2020, 0, 1).unix() == 0


def test_dragon_enhance_cost_default_cost_independent():
    a = DragonEnhanceCost()
    b = DragonEnhanceCost()
    a.cost.count = 5
    assert b.cost.count == 0