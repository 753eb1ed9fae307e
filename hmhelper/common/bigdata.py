"""Arbitrary-size integer stored as decimal text."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from fractions import Fraction

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_OCTAL_RE = re.compile(r"([+-]?)0([0-7_]+)")
_FLOAT_PRECISION = 53


def _parse_decimal(text: str) -> int | None:
    if _DECIMAL_RE.fullmatch(text):
        return int(text)
    return None


def _round_to_precision(value: Fraction, bits: int) -> Fraction:
    """Round ``value`` to ``bits`` significant bits, ties to even."""
    if value == 0:
        return value
    sign = -1 if value < 0 else 1
    magnitude = abs(value)
    exp = magnitude.numerator.bit_length() - magnitude.denominator.bit_length()
    if Fraction(2) ** exp > magnitude:
        exp -= 1
    scale = Fraction(2) ** (exp - bits + 1)
    mantissa = round(magnitude / scale)
    return sign * mantissa * scale


@dataclass
class BigDataInfo:
    """An integer of any size, kept as decimal text in storage and JSON."""

    value: int = 0

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def from_string(cls, text: str) -> "BigDataInfo":
        """Build from decimal text; text that does not parse gives zero."""
        result = cls()
        result.decode(text)
        return result

    def decode(self, text: str) -> None:
        """Set the value from decimal text; text that does not parse gives zero."""
        parsed = _parse_decimal(text)
        self.value = parsed if parsed is not None else 0

    def mul_float(self, factor: float) -> None:
        """Multiply by ``factor`` at double precision and truncate toward zero."""
        if not math.isfinite(factor):
            raise ValueError(f"factor must be finite: {factor!r}")
        product = Fraction(factor) * self.value
        self.value = int(_round_to_precision(product, _FLOAT_PRECISION))

    def scan(self, raw: bytes | str) -> None:
        """Load the value from a stored column."""
        text = raw.decode() if isinstance(raw, (bytes, bytearray)) else raw
        self.decode(text)

    def to_db(self) -> bytes:
        """Decimal text for storage."""
        return str(self.value).encode()

    def to_json(self) -> str:
        """JSON number text."""
        return str(self.value)

    def load_json(self, data: bytes | str) -> None:
        """Set the value from JSON number text; raises ValueError if it is not an integer."""
        text = data.decode() if isinstance(data, (bytes, bytearray)) else data
        text = text.strip()
        octal = _OCTAL_RE.fullmatch(text)
        try:
            if octal:
                self.value = int(octal.group(1) + "0o" + octal.group(2), 0)
            else:
                self.value = int(text, 0)
        except ValueError:
            raise ValueError(f"invalid integer: {text!r}") from None