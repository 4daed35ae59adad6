"""
Die model for the Die Agony puzzle.

A die has six faces, each holding a value that may still be unknown (None).
Rolling never invents or drops a value: it only changes which physical face
points up. Opposite pairs are {top, bottom}, {left, right}, {front, back}.
"""

from dataclasses import dataclass, replace

from .board import Direction

FACES = ("top", "bottom", "left", "right", "front", "back")


@dataclass(frozen=True)
class Die:
    """Values on each side of the die, None where not known yet."""
    top: int | None = None
    bottom: int | None = None
    left: int | None = None
    right: int | None = None
    front: int | None = None
    back: int | None = None

    def get_top(self) -> int | None:
        return self.top

    def set_top(self, top: int) -> "Die":
        """Return a copy of the die with the (unknown) top face pinned to top."""
        if self.top is not None:
            raise ValueError(f"Top face is already known ({self.top}), cannot set it to {top}")
        return replace(self, top=top)

    def roll_in(self, direction: Direction) -> "Die":
        """New die, rolled once in the given direction."""
        if direction is Direction.UP:
            return self.roll_up()
        if direction is Direction.RIGHT:
            return self.roll_right()
        if direction is Direction.DOWN:
            return self.roll_down()
        if direction is Direction.LEFT:
            return self.roll_left()
        raise ValueError(f"Cannot roll the die in direction {direction!r}")

    def roll_up(self) -> "Die":
        return Die(
            top=self.back,
            bottom=self.front,
            left=self.left,
            right=self.right,
            front=self.top,
            back=self.bottom,
        )

    def roll_down(self) -> "Die":
        return Die(
            top=self.front,
            bottom=self.back,
            left=self.left,
            right=self.right,
            front=self.bottom,
            back=self.top,
        )

    def roll_left(self) -> "Die":
        return Die(
            top=self.right,
            bottom=self.left,
            left=self.top,
            right=self.bottom,
            front=self.front,
            back=self.back,
        )

    def roll_right(self) -> "Die":
        return Die(
            top=self.left,
            bottom=self.right,
            left=self.bottom,
            right=self.top,
            front=self.front,
            back=self.back,
        )

    def known_faces(self) -> int:
        return sum(getattr(self, face) is not None for face in FACES)

    def describe(self) -> str:
        """Compact rendering, e.g. 'top=9 bottom=? left=-3 ...'."""
        parts = []
        for face in FACES:
            value = getattr(self, face)
            parts.append(f"{face}={'?' if value is None else value}")
        return " ".join(parts)
