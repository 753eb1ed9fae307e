"""A 64-bit flag set."""

from __future__ import annotations

from dataclasses import dataclass

_MASK64 = (1 << 64) - 1


@dataclass
class Bitmask:
    """Unsigned 64-bit set of flags."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value &= _MASK64

    def has_flag(self, flag: int) -> bool:
        """Whether any bit of ``flag`` is set."""
        return self.value & flag != 0

    def add_flag(self, flag: int) -> None:
        """Set the bits of ``flag``."""
        self.value = (self.value | flag) & _MASK64

    def clear_flag(self, flag: int) -> None:
        """Clear the bits of ``flag``."""
        self.value &= ~flag & _MASK64

    def toggle_flag(self, flag: int) -> None:
        """Flip the bits of ``flag``."""
        self.value = (self.value ^ flag) & _MASK64