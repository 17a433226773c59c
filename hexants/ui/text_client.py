"""Plain-text renderer: one ASCII frame per tick.

Glyphs:

- ``#`` wall
- ``R`` / ``B`` red / black ant (lower-case when carrying food)
- ``1``-``9`` food on an empty cell, ``*`` for ten or more
- ``.`` empty cell

Each row is indented one more space than the row above so neighbouring
cells line up the way they do on the hex grid.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from hexants.colony.ant import Color

if TYPE_CHECKING:
    from hexants.world.world import World

_ANT_GLYPHS: dict[Color, str] = {
    Color.RED: "R",
    Color.BLACK: "B",
}


def render_frame(world: World) -> str:
    """Return the world drawn as text, one line per grid row."""
    ants = {view.id: view for view in world.ants()}
    lines: list[str] = []
    for y, row in enumerate(world.grid.cells):
        glyphs: list[str] = []
        for cell in row:
            if cell.is_wall:
                glyphs.append("#")
            elif cell.ant_id is not None:
                ant = ants[cell.ant_id]
                glyph = _ANT_GLYPHS[ant.color]
                glyphs.append(glyph.lower() if ant.carries_food else glyph)
            elif cell.food >= 10:
                glyphs.append("*")
            elif cell.food > 0:
                glyphs.append(str(cell.food))
            else:
                glyphs.append(".")
        lines.append(" " * y + " ".join(glyphs))
    return "\n".join(lines)


class TextRenderer:
    """Writes a text frame to a stream after every tick.

    Attributes:
        stream: Where frames are written.
        frames: Number of frames written so far.
    """

    running = True

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.frames = 0

    def render(self, world: World) -> None:
        self.frames += 1
        self.stream.write(f"-- tick {self.frames} --\n")
        self.stream.write(render_frame(world))
        self.stream.write("\n")
        self.stream.flush()
