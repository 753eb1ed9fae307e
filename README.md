# hmhelper

Building blocks for game servers that keep players' inventories:

- `hmhelper.common` — parsing of the compact configuration strings used in
  item tables (`"1001,5;1002,3"`), item, property and condition records,
  weighted draws, the `BaseData` id→count store, time helpers with a daily
  reset hour, a 64-bit `Bitmask`, sorting of int maps and small sequence
  utilities.
- `hmhelper.bag` — item, gold-log and helper configuration (`ItemCfg`,
  `GoldLogCfg`, `HelperConf`), plain count bags (`BaseBag`) and bags of
  individual instances keyed by uid (`ExBag`).
- `hmhelper.centerserver` — the user's credentials for the central coin
  service (`UserCenterMD.headers()`) and its reply format (`CCAck`).

The package has no runtime dependencies.

## Install

```
pip install hmhelper
```

For running the tests:

```
pip install "hmhelper[test]"
pytest
```

## Examples

Decoding an item list from a config cell:

```python
from hmhelper.common.items import parse_item_infos, items_times

rewards = parse_item_infos("1001,5;1002,3")
doubled = items_times(rewards, 2.0)
```

Bad input raises `hmhelper.common.items.DecodeError`, a `ValueError`.

Keeping counts per item id:

```python
from hmhelper.common.basedata import BaseData

store = BaseData.from_string("1,10;2,5")
store.update(1, -4)
store.get(1)        # 6
store.to_string()   # "1,6;2,5"
```

A count bag with a per-item cap:

```python
from hmhelper.bag.bags import BaseBag
from hmhelper.bag.config import ItemCfg

bag = BaseBag()
sword = ItemCfg(id=7, bag_key="base", max_num=3)
bag.add_item(sword, 7, 5, 0)   # only 3 fit
bag.get_item_num(7)            # 3
```

Daily gold limits by days since registration:

```python
from hmhelper.bag.config import HelperConf

HelperConf().max_gold_by_day_num(1)   # 3000
HelperConf().max_gold_by_day_num(5)   # 1100
```

## What it does not do

- It does not talk to the central coin service: it builds the request
  headers and parses replies, but sends no requests.
- There is no gold bag and no manager that routes items across a user's
  bags; callers pick the bag themselves.
- There is no storage layer. `BaseBag.to_db`/`scan` and `ExBag.to_db`/`scan`
  produce and read column values, but saving them is up to the caller.