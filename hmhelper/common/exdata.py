"""Extra data whose values stay raw JSON until asked for."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass
class JsonData:
    """A value that is either raw JSON bytes or a decoded object."""

    data: Any = None

    def to_json(self) -> str:
        """JSON text; raw bytes are passed through unchanged."""
        if isinstance(self.data, (bytes, bytearray)):
            return bytes(self.data).decode("utf-8")
        return json.dumps(self.data, ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: bytes | str) -> "JsonData":
        """Keep a copy of the raw JSON without decoding it."""
        if isinstance(raw, str):
            return cls(raw.encode("utf-8"))
        return cls(bytes(raw))

    def to(self, factory: Callable[..., T]) -> T:
        """Decode raw JSON through ``factory`` and keep the result.

        ``factory`` receives the decoded JSON value; when the raw text is not
        valid JSON it is called with no arguments to give an empty value.
        Already decoded data is returned as it is.
        """
        if isinstance(self.data, (bytes, bytearray)):
            try:
                parsed = json.loads(bytes(self.data))
            except ValueError:
                value = factory()
            else:
                value = factory(parsed)
            self.data = value
            return value
        return self.data


class ExData(dict):
    """Named JsonData values."""

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, reusing an existing entry."""
        entry = self.get(key)
        if entry is not None:
            entry.data = value
        else:
            self[key] = JsonData(value)