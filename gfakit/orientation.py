"""Segment orientation (strand) marker."""

from __future__ import annotations

from enum import Enum


class Orientation(Enum):
    FORWARD = b"+"
    BACKWARD = b"-"

    @classmethod
    def parse(cls, token: bytes) -> Orientation | None:
        """Parse a single '+' or '-' byte. Returns None for anything else."""
        try:
            return cls(bytes(token))
        except ValueError:
            return None

    @property
    def symbol(self) -> bytes:
        return self.value

    def is_reverse(self) -> bool:
        return self is Orientation.BACKWARD

    def __str__(self) -> str:
        return self.value.decode("ascii")
