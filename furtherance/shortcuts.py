"""Saved shortcuts for quickly starting a timer with preset details."""

from __future__ import annotations

import math
import struct
import time
from dataclasses import dataclass
from decimal import Decimal

from furtherance.hashing import blake3_hex


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _f32_display(value: float) -> str:
    """Shortest decimal text identifying ``value`` as a single-precision float."""
    single = _to_f32(value)
    if math.isnan(single):
        return "NaN"
    if math.isinf(single):
        return "inf" if single > 0 else "-inf"
    text = repr(single)
    for precision in range(1, 10):
        candidate = format(single, f".{precision}g")
        if _to_f32(float(candidate)) == single:
            text = candidate
            break
    return format(Decimal(text), "f")


def generate_shortcut_uid(name: str, tags: str, project: str, rate: float, currency: str) -> str:
    """Identifier derived from the shortcut's descriptive fields."""
    return blake3_hex(f"{name}{tags}{project}{_f32_display(rate)}{currency}")


@dataclass
class FurShortcut:
    name: str
    tags: str
    project: str
    rate: float
    currency: str
    color_hex: str
    uid: str
    is_deleted: bool = False
    last_updated: int = 0

    @classmethod
    def create(
        cls,
        name: str,
        tags: str,
        project: str,
        rate: float,
        currency: str,
        color_hex: str,
    ) -> FurShortcut:
        """Build a shortcut with a generated uid, stamped with the current time."""
        return cls(
            name=name,
            tags=tags,
            project=project,
            rate=rate,
            currency=currency,
            color_hex=color_hex,
            uid=generate_shortcut_uid(name, tags, project, rate, currency),
            last_updated=int(time.time()),
        )

    def __str__(self) -> str:
        parts = [self.name]
        if self.project:
            parts.append(f" @{self.project}")
        if self.tags:
            parts.append(f" {self.tags}")
        if self.rate != 0.0:
            parts.append(f" ${self.rate:.2f}")
        return "".join(parts)


@dataclass
class EncryptedShortcut:
    encrypted_data: str
    nonce: str
    uid: str
    last_updated: int