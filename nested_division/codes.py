"""
Code resolution for fixed-width administrative division codes.

A code is positional: the first 2 digits name the province, the first 4
the city, the first 6 the area, and anything after that is a street's
free-form suffix inside its area. Ancestor codes are the matching prefix
right-padded with ``0`` to the 6-digit standard width, so the province of
``1101010001`` is ``110000`` and its city is ``110100``.

Codes are parsed once into a HierarchyKey; the builder works with its
fields instead of slicing strings at every level.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import MalformedCodeError
from .models import Level

PROVINCE_WIDTH = 2
CITY_WIDTH = 4
AREA_WIDTH = 6
CODE_WIDTH = AREA_WIDTH

# Minimum code length per level. Streets need a non-empty suffix.
_MIN_WIDTH = {
    Level.PROVINCE: PROVINCE_WIDTH,
    Level.CITY: CITY_WIDTH,
    Level.AREA: AREA_WIDTH,
    Level.STREET: AREA_WIDTH + 1,
}


def _prefix(code: str, width: int) -> str:
    if len(code) < width:
        raise MalformedCodeError(
            f"Code {code!r} is shorter than the {width} digits required",
            code=code,
        )
    return code[:width].ljust(CODE_WIDTH, "0")


def province_of(code: str) -> str:
    """Code of the province containing ``code``."""
    return _prefix(code, PROVINCE_WIDTH)


def city_of(code: str) -> str:
    """Code of the city containing ``code``."""
    return _prefix(code, CITY_WIDTH)


def area_of(code: str) -> str:
    """Code of the area containing ``code``."""
    return _prefix(code, AREA_WIDTH)


def infer_level(code: str) -> Level:
    """Guess a code's level from its length (2, 4, 6 or longer)."""
    n = len(code)
    if n == PROVINCE_WIDTH:
        return Level.PROVINCE
    if n == CITY_WIDTH:
        return Level.CITY
    if n == AREA_WIDTH:
        return Level.AREA
    if n > AREA_WIDTH:
        return Level.STREET
    raise MalformedCodeError(f"Code {code!r} has no level of length {n}", code=code)


@dataclass(frozen=True)
class HierarchyKey:
    """
    Structured form of a division code.

    Fields below the key's level are empty strings, e.g. a city key has
    ``area_id == ""`` and ``street_suffix == ""``.
    """

    province_id: str
    city_id: str = ""
    area_id: str = ""
    street_suffix: str = ""

    @property
    def level(self) -> Level:
        if self.street_suffix:
            return Level.STREET
        if self.area_id:
            return Level.AREA
        if self.city_id:
            return Level.CITY
        return Level.PROVINCE

    @property
    def province_code(self) -> str:
        return self.province_id.ljust(CODE_WIDTH, "0")

    @property
    def city_code(self) -> str:
        return (self.province_id + self.city_id).ljust(CODE_WIDTH, "0")

    @property
    def area_code(self) -> str:
        return self.province_id + self.city_id + self.area_id

    @property
    def own_code(self) -> str:
        """Lookup code of the node this key names."""
        level = self.level
        if level == Level.PROVINCE:
            return self.province_code
        if level == Level.CITY:
            return self.city_code
        if level == Level.AREA:
            return self.area_code
        return self.area_code + self.street_suffix

    def parent_code(self) -> str | None:
        """Lookup code of the enclosing node, None for provinces."""
        level = self.level
        if level == Level.CITY:
            return self.province_code
        if level == Level.AREA:
            return self.city_code
        if level == Level.STREET:
            return self.area_code
        return None

    def ancestors(self) -> tuple[str, ...]:
        """Lookup codes from the province down to the direct parent."""
        chain = (self.province_code, self.city_code, self.area_code)
        return chain[: int(self.level) - 1]


def parse_key(code: str, level: Level | None = None) -> HierarchyKey:
    """
    Parse a code into a HierarchyKey.

    Args:
        code: Numeric division code.
        level: Level the code belongs to. Inferred from the length if None,
            which is only reliable for unpadded codes.

    Raises:
        MalformedCodeError: Non-numeric code, shorter than its level needs, or
            padded with non-zero digits past its level.
    """
    if not code.isdigit():
        raise MalformedCodeError(f"Code {code!r} is not numeric", code=code)
    if level is None:
        level = infer_level(code)

    width = _MIN_WIDTH[level]
    if len(code) < width:
        raise MalformedCodeError(
            f"{level.name.lower()} code {code!r} is shorter than {width} digits",
            code=code,
        )
    if level != Level.STREET and code[width:].strip("0"):
        raise MalformedCodeError(
            f"{level.name.lower()} code {code!r} has non-zero digits past position {width}",
            code=code,
        )

    province_id = code[:PROVINCE_WIDTH]
    if level == Level.PROVINCE:
        return HierarchyKey(province_id)
    city_id = code[PROVINCE_WIDTH:CITY_WIDTH]
    if level == Level.CITY:
        return HierarchyKey(province_id, city_id)
    area_id = code[CITY_WIDTH:AREA_WIDTH]
    if level == Level.AREA:
        return HierarchyKey(province_id, city_id, area_id)
    return HierarchyKey(province_id, city_id, area_id, code[AREA_WIDTH:])
