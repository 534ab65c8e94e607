"""Borough-Block-Lot parcel identifiers.

See https://en.wikipedia.org/wiki/Borough,_Block_and_Lot
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

MAX_BLOCK = 99_999
MAX_LOT = 9_999
BBL_RE = re.compile(r"^([1-5])(\d{5})(\d{4})$")


class Borough(IntEnum):
    MANHATTAN = 1
    BRONX = 2
    BROOKLYN = 3
    QUEENS = 4
    STATEN_ISLAND = 5


@dataclass(frozen=True)
class BBL:
    borough: Borough
    block: int
    lot: int

    @classmethod
    def from_numbers(cls, boro: int, block: int, lot: int) -> BBL:
        try:
            borough = Borough(int(boro))
        except ValueError as exc:
            raise ValueError(f"Invalid borough ID: {boro}") from exc
        if not 0 <= int(block) <= MAX_BLOCK:
            raise ValueError(f"Invalid block: {block}")
        if not 0 <= int(lot) <= MAX_LOT:
            raise ValueError(f"Invalid lot: {lot}")
        return cls(borough=borough, block=int(block), lot=int(lot))

    @classmethod
    def parse(cls, value: str) -> BBL:
        match = BBL_RE.match(value.strip())
        if match is None:
            raise ValueError(f"Invalid BBL: {value!r}")
        boro, block, lot = match.groups()
        return cls.from_numbers(int(boro), int(block), int(lot))

    def __str__(self) -> str:
        return f"{int(self.borough)}{self.block:05d}{self.lot:04d}"
