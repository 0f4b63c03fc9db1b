"""
Block Module - The atomic movable piece of a level.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict


class BlockKind(Enum):
    """
    Block kinds and the axis each one slides along.

    HORIZONTAL and KEY move along x only, VERTICAL along y only.
    Values match the "type" strings of the level schema.
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    KEY = "key"

    @property
    def moves_horizontally(self) -> bool:
        return self is not BlockKind.VERTICAL

    @property
    def moves_vertically(self) -> bool:
        return self is BlockKind.VERTICAL


@dataclass(frozen=True)
class Block:
    """
    A rectangular block on the grid.

    Coordinates are the top-left cell, 0-indexed. Sliders are 1 cell thick
    along the axis they do not move on; the key block is 2x1.

    Attributes:
        id: Identifier, stable for the lifetime of the level
        x: Left column
        y: Top row
        width: Extent in columns
        height: Extent in rows
        kind: Block kind (determines movement axis)
        is_moving: UI drag flag, carried through untouched
        is_highlighted: UI hint flag, carried through untouched
    """
    id: str
    x: int
    y: int
    width: int
    height: int
    kind: BlockKind
    is_moving: bool = False
    is_highlighted: bool = False

    @property
    def is_key(self) -> bool:
        return self.kind is BlockKind.KEY

    @property
    def right(self) -> int:
        """Column just past the right edge (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Row just past the bottom edge (y + height)."""
        return self.y + self.height

    def moved_to(self, x: int, y: int) -> 'Block':
        """Return a copy of this block placed at (x, y)."""
        return replace(self, x=x, y=y)

    def moved_by(self, dx: int, dy: int) -> 'Block':
        """Return a copy of this block shifted by (dx, dy)."""
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the plain level schema.

        Returns:
            Dict with id, x, y, width, height and type keys
        """
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "type": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Block':
        """
        Create a Block from the plain level schema.

        Args:
            data: Dict with id, x, y, width, height and type keys

        Returns:
            Block instance

        Raises:
            ValueError: If the type is unknown or a field is missing
        """
        try:
            return cls(
                id=str(data["id"]),
                x=int(data["x"]),
                y=int(data["y"]),
                width=int(data["width"]),
                height=int(data["height"]),
                kind=BlockKind(data["type"]),
            )
        except KeyError as e:
            raise ValueError(f"Block is missing field {e}") from e

    @classmethod
    def key(cls, x: int, y: int, block_id: str = "key") -> 'Block':
        """Create the 2x1 key block."""
        return cls(id=block_id, x=x, y=y, width=2, height=1, kind=BlockKind.KEY)

    @classmethod
    def horizontal(cls, block_id: str, x: int, y: int, width: int = 2) -> 'Block':
        """Create a horizontal slider."""
        return cls(id=block_id, x=x, y=y, width=width, height=1,
                   kind=BlockKind.HORIZONTAL)

    @classmethod
    def vertical(cls, block_id: str, x: int, y: int, height: int = 2) -> 'Block':
        """Create a vertical slider."""
        return cls(id=block_id, x=x, y=y, width=1, height=height,
                   kind=BlockKind.VERTICAL)
