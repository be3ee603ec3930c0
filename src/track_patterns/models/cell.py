"""
Cell model - what can occupy one lane at one row.

Authors write cells as short alias tokens ("c", "A", "" ...). The mapping
from token to CellContent is a fixed, case-sensitive lookup table: a token
that is not in the table is an error, never Empty.
"""

from __future__ import annotations

from enum import Enum

from track_patterns.constants import ArcHeight
from track_patterns.errors import UnknownToken


class CellContent(str, Enum):
    """Closed set of lane-cell contents. Values are the canonical long names."""

    EMPTY = "Empty"
    COIN_LOW = "CoinLow"
    COIN_HIGH = "CoinHigh"
    RAMP = "Ramp"
    BARRIER = "Barrier"
    ARC_START_LOW = "ArcStartLow"
    ARC_END_LOW = "ArcEndLow"
    ARC_START_HIGH = "ArcStartHigh"
    ARC_END_HIGH = "ArcEndHigh"
    POWERUP_SPAWN_LOW = "PowerupSpawnLow"
    POWERUP_SPAWN_HIGH = "PowerupSpawnHigh"

    @property
    def is_arc_start(self) -> bool:
        return self in _ARC_STARTS

    @property
    def is_arc_end(self) -> bool:
        return self in _ARC_ENDS

    @property
    def arc_height(self) -> ArcHeight | None:
        """Height of an arc marker, None for every other cell."""
        return _ARC_STARTS.get(self) or _ARC_ENDS.get(self)

    @property
    def blocks_arc(self) -> bool:
        """Cells that must not appear inside an open coin arc."""
        return self in _ARC_BLOCKERS


_ARC_STARTS: dict[CellContent, ArcHeight] = {
    CellContent.ARC_START_LOW: ArcHeight.LOW,
    CellContent.ARC_START_HIGH: ArcHeight.HIGH,
}

_ARC_ENDS: dict[CellContent, ArcHeight] = {
    CellContent.ARC_END_LOW: ArcHeight.LOW,
    CellContent.ARC_END_HIGH: ArcHeight.HIGH,
}

_ARC_BLOCKERS = frozenset(
    {
        CellContent.RAMP,
        CellContent.BARRIER,
        CellContent.POWERUP_SPAWN_LOW,
        CellContent.POWERUP_SPAWN_HIGH,
    }
)

# Short authoring aliases. The first alias of each entry is the preferred one.
CELL_ALIASES: dict[CellContent, tuple[str, ...]] = {
    CellContent.EMPTY: ("", "e", "n"),
    CellContent.COIN_LOW: ("c",),
    CellContent.COIN_HIGH: ("C",),
    CellContent.RAMP: ("r",),
    CellContent.BARRIER: ("b",),
    CellContent.ARC_START_LOW: ("a",),
    CellContent.ARC_END_LOW: ("x",),
    CellContent.ARC_START_HIGH: ("A",),
    CellContent.ARC_END_HIGH: ("X",),
    CellContent.POWERUP_SPAWN_LOW: ("p",),
    CellContent.POWERUP_SPAWN_HIGH: ("P",),
}

# Long names used by older pattern files
_LEGACY_NAMES: dict[str, CellContent] = {
    "None": CellContent.EMPTY,
    "CoinArcStartLow": CellContent.ARC_START_LOW,
    "CoinArcEndLow": CellContent.ARC_END_LOW,
    "CoinArcStartHigh": CellContent.ARC_START_HIGH,
    "CoinArcEndHigh": CellContent.ARC_END_HIGH,
}


def _build_token_table() -> dict[str, CellContent]:
    table: dict[str, CellContent] = {}
    for content, aliases in CELL_ALIASES.items():
        table[content.value] = content
        for alias in aliases:
            if alias in table:
                raise ValueError(f"Alias {alias!r} is mapped twice")
            table[alias] = content
    table.update(_LEGACY_NAMES)
    return table


TOKEN_TABLE: dict[str, CellContent] = _build_token_table()


def parse_cell(token: object) -> CellContent:
    """
    Map an authoring token to its CellContent.

    Args:
        token: Alias or long name, e.g. "c", "CoinLow" or ""

    Returns:
        The matching CellContent

    Raises:
        UnknownToken: If the token is not a string in the alias table
    """
    if not isinstance(token, str):
        raise UnknownToken(token)
    try:
        return TOKEN_TABLE[token]
    except KeyError:
        raise UnknownToken(token) from None


def to_alias(content: CellContent) -> str:
    """Return the preferred short alias for a cell."""
    return CELL_ALIASES[content][0]
