"""Result of estimating the scalar field at one query point."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar


class FieldKind(IntEnum):
    """Variant tag; also used as the dtype-compatible code in kind arrays."""

    NO_DATA = 0
    ESTIMATED = 1
    EXACT = 2


@dataclass(frozen=True)
class Estimated:
    """Inverse-distance-weighted average over all samples."""

    value: float
    kind: ClassVar[FieldKind] = FieldKind.ESTIMATED


@dataclass(frozen=True)
class Exact:
    """Query point lies within the minimum radius of a real sensor."""

    value: float
    kind: ClassVar[FieldKind] = FieldKind.EXACT


@dataclass(frozen=True)
class NoData:
    """Every sensor is beyond the maximum distance."""

    kind: ClassVar[FieldKind] = FieldKind.NO_DATA


FieldValue = Estimated | Exact | NoData

NO_DATA = NoData()


def field_from_code(kind: int, value: float) -> FieldValue:
    """Build a FieldValue from a (kind, value) pair of a kind/value array."""
    k = FieldKind(int(kind))
    if k is FieldKind.EXACT:
        return Exact(float(value))
    if k is FieldKind.ESTIMATED:
        return Estimated(float(value))
    return NO_DATA
