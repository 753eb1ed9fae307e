from hmhelper.common.sortmap import (
    KVInt,
    sort_kv_int_map,
    sort_kv_int_map_by_key,
    sort_kv_int_map_desc,
    sort_kv_int_slice,
    sort_kv_int_slice_desc,
    sorted_int64_keys,
)

DATA = {3: 30, 1: 50, 2: 10, 9: 20}


def _values(items):
    return [kv.v for kv in items]


def test_sorted_int64_keys_by_value_desc():
    keys = sorted_int64_keys(DATA)
    assert sorted(keys) == sorted(DATA)
    values = [DATA[k] for k in keys]
    assert values == sorted(values, reverse=True)


def test_sort_kv_int_map_ascending():
    result = sort_kv_int_map(DATA)
    assert {kv.k: kv.v for kv in result} == DATA
    assert _values(result) == sorted(DATA.values())


def test_sort_kv_int_map_desc():
    result = sort_kv_int_map_desc(DATA)
    assert {kv.k: kv.v for kv in result} == DATA
    assert _values(result) == sorted(DATA.values(), reverse=True)


def test_sort_kv_int_map_by_key():
    result = sort_kv_int_map_by_key(DATA)
    assert [kv.k for kv in result] == sorted(DATA)


def test_sort_slices_in_place():
    items = [KVInt(1, 5), KVInt(2, 1), KVInt(3, 3)]
    result = sort_kv_int_slice(items)
    assert result is items
    assert _values(items) == [1, 3, 5]
    sort_kv_int_slice_desc(items)
    assert _values(items) == [5, 3, 1]


def test_empty_map():
    assert sort_kv_int_map({}) == []
    assert sorted_int64_keys({}) == []