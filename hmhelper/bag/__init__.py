"""Bag configuration tables, count bags and bags of uid-keyed instances."""