"""Snake chain representation and the follow-the-leader movement step."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from grid_snake.grid import Position


class Direction(enum.Enum):
    """Cardinal facings with (col_delta, row_delta) values."""

    UP = (0, 1)
    LEFT = (-1, 0)
    DOWN = (0, -1)
    RIGHT = (1, 0)

    def is_opposite(self, other: Direction) -> bool:
        """Return True when *other* is the exact 180° reversal of self."""
        return _OPPOSITES[self] is other


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class SegmentKind(enum.Enum):
    HEAD = "head"
    BODY = "body"


@dataclass
class Segment:
    """A single cell of the chain."""

    position: Position
    kind: SegmentKind


class SnakeChain:
    """Ordered head-first sequence of segments.

    ``segments[0]`` is the head. Body segment ``i`` follows segment
    ``i - 1``; the last segment is the tail and has no follower.
    """

    def __init__(
        self,
        head: Position,
        direction: Direction = Direction.RIGHT,
        body_length: int = 1,
    ) -> None:
        if body_length < 1:
            raise ValueError("Snake body length must be at least 1.")
        dc, dr = direction.value
        col, row = head
        self.segments: list[Segment] = [Segment(head, SegmentKind.HEAD)]
        for i in range(1, body_length + 1):
            self.segments.append(
                Segment((col - dc * i, row - dr * i), SegmentKind.BODY),
            )
        self.direction = direction

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def head(self) -> Position:
        """Return the head position."""
        return self.segments[0].position

    @property
    def tail(self) -> Position:
        return self.segments[-1].position

    @property
    def body_positions(self) -> list[Position]:
        """Body positions in head-to-tail order, head excluded."""
        return [seg.position for seg in self.segments[1:]]

    @property
    def positions(self) -> list[Position]:
        return [seg.position for seg in self.segments]

    def leader_index(self, index: int) -> int | None:
        """Index of the segment that *index* follows, or None for the head."""
        if not 0 <= index < len(self.segments):
            raise IndexError(f"No segment at index {index}.")
        return index - 1 if index > 0 else None

    def occupies(self, pos: Position) -> bool:
        """Check whether any segment sits on *pos*."""
        return any(seg.position == pos for seg in self.segments)

    def change_direction(self, direction: Direction) -> bool:
        """Turn the head, ignoring 180° reversals. Returns True if turned."""
        if self.direction.is_opposite(direction):
            return False
        self.direction = direction
        return True

    def advance(
        self,
        pending_direction: Direction | None = None,
        grow: bool = False,
    ) -> Position:
        """Move the chain one cell and return the new head position.

        Each body segment takes the position its leader held before the
        move. With *grow*, a new tail is appended where the old tail was.
        """
        if pending_direction is not None:
            self.change_direction(pending_direction)

        head = self.segments[0]
        carry = head.position
        dc, dr = self.direction.value
        head.position = (carry[0] + dc, carry[1] + dr)

        for seg in self.segments[1:]:
            seg.position, carry = carry, seg.position

        if grow:
            self.segments.append(Segment(carry, SegmentKind.BODY))

        return head.position

    def to_dict(self) -> dict:
        """Serialize chain state to a dictionary."""
        return {
            "head": list(self.head),
            "body": [list(p) for p in self.body_positions],
            "direction": self.direction.name.lower(),
        }
