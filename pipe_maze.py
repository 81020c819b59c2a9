#!/usr/bin/env python3
"""
Pipe Maze Loop Finder

Finds the closed pipe loop running through the start tile 'S' of a pipe maze
and reports the distance to the loop tile farthest from the start.

Tiles:
    |  vertical pipe          -  horizontal pipe
    L  north-east bend        J  north-west bend
    7  south-west bend        F  south-east bend
    .  ground                 S  start (pipe shape hidden)

Examples:
    # Solve input.txt in the current directory
    python3 pipe_maze.py

    # Solve a given maze without colors
    python3 pipe_maze.py -i maze.txt --no-color

    # Solve the built-in sample and save a picture of the loop
    python3 pipe_maze.py --sample --image loop.png --scale 4
"""

import sys
import re
import math
import argparse
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import numpy as np
from PIL import Image


# Shapes

VERTICAL = 'vertical'
HORIZONTAL = 'horizontal'
NORTH_EAST = 'north-east bend'
NORTH_WEST = 'north-west bend'
SOUTH_WEST = 'south-west bend'
SOUTH_EAST = 'south-east bend'
GROUND = 'ground'
START = 'start'

CHAR_TO_SHAPE = {
    '|': VERTICAL,
    '-': HORIZONTAL,
    'L': NORTH_EAST,
    'J': NORTH_WEST,
    '7': SOUTH_WEST,
    'F': SOUTH_EAST,
    '.': GROUND,
    'S': START,
}

SHAPE_GLYPHS = {
    VERTICAL: '┃',
    HORIZONTAL: '━',
    NORTH_EAST: '┗',
    NORTH_WEST: '┛',
    SOUTH_WEST: '┓',
    SOUTH_EAST: '┏',
    GROUND: '░',
    START: '╳',
}

# Neighbor offsets (dx, dy) each shape links to; y grows downwards
NORTH, SOUTH, EAST, WEST = (0, -1), (0, 1), (1, 0), (-1, 0)

CONNECTIONS = {
    VERTICAL: (NORTH, SOUTH),
    HORIZONTAL: (WEST, EAST),
    NORTH_EAST: (NORTH, EAST),
    NORTH_WEST: (NORTH, WEST),
    SOUTH_EAST: (SOUTH, EAST),
    SOUTH_WEST: (SOUTH, WEST),
    GROUND: (),
    START: (),
}

# Shapes of a neighbor that reach back into the start tile
CONNECTS_FROM = {
    NORTH: (VERTICAL, SOUTH_WEST, SOUTH_EAST),
    SOUTH: (VERTICAL, NORTH_WEST, NORTH_EAST),
    EAST: (HORIZONTAL, SOUTH_WEST, NORTH_WEST),
    WEST: (HORIZONTAL, SOUTH_EAST, NORTH_EAST),
}

# Checked in order, first matching pair decides the start shape
START_PAIRS = [
    ((NORTH, SOUTH), VERTICAL),
    ((EAST, WEST), HORIZONTAL),
    ((NORTH, EAST), NORTH_EAST),
    ((NORTH, WEST), NORTH_WEST),
    ((SOUTH, EAST), SOUTH_EAST),
    ((SOUTH, WEST), SOUTH_WEST),
]

# ANSI SGR codes
FG_LOOP, FG_OTHER = 33, 37
BG_START, BG_OTHER = 44, 40

# Image palette (RGB)
IMG_BACKGROUND = (0, 0, 0)
IMG_GROUND = (40, 40, 40)
IMG_LOOP = (70, 50, 0)
IMG_START = (0, 40, 140)
IMG_PIPE = (170, 170, 170)
IMG_LOOP_PIPE = (255, 200, 0)

DEFAULT_INPUT = 'input.txt'

SAMPLE_INPUT = """\
7-F7-
.FJ|7
SJLL7
|F--J
LJ.LJ
"""


class StartNotFoundError(LookupError):
    """No start tile in the maze."""


class LoopError(ValueError):
    """The pipes from the start tile do not form a closed loop."""


# Grid Model

Position = Tuple[int, int]


class Tile:
    def __init__(self, char: str, x: int, y: int):
        self.shape = CHAR_TO_SHAPE.get(char, GROUND)
        self.position = (x, y)
        self.is_start = self.shape == START
        self.on_loop = self.is_start

    def __repr__(self):
        return f"Tile({self.shape!r}, {self.position}, on_loop={self.on_loop})"


class PipeGrid:
    def __init__(self, rows: List[List[Tile]]):
        self.rows = rows

    @classmethod
    def from_text(cls, text: str) -> 'PipeGrid':
        """Parse maze text, one row per line."""
        lines = re.split(r'\r?\n', text)
        # Final newline leaves an empty last line
        if lines and lines[-1] == '':
            lines.pop()

        rows = [
            [Tile(char, x, y) for x, char in enumerate(line)]
            for y, line in enumerate(lines)
        ]
        return cls(rows)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def __len__(self):
        return sum(len(row) for row in self.rows)

    def tiles(self) -> Iterator[Tile]:
        """Iterate tiles in row-major order."""
        for row in self.rows:
            yield from row

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        """Tile at (x, y), or None outside the grid."""
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return None

    def connections(self, tile: Tile) -> List[Position]:
        """Positions the tile's pipe links to (empty for ground and start)."""
        x, y = tile.position
        return [(x + dx, y + dy) for dx, dy in CONNECTIONS[tile.shape]]


# Loop Walker

def resolve_start(grid: PipeGrid) -> Tile:
    """
    Find the start tile and replace its marker with the pipe shape
    implied by its neighbors.

    With several start tiles the last one in row-major order is used.
    If no neighbor pair fits, the shape stays START.

    Raises:
        StartNotFoundError: no start tile in the grid
    """
    start = None
    for tile in grid.tiles():
        if tile.is_start:
            start = tile

    if start is None:
        raise StartNotFoundError("No start tile 'S' in maze")

    if start.shape != START:
        return start

    x, y = start.position
    linked = set()
    for offset, shapes in CONNECTS_FROM.items():
        neighbor = grid.tile_at(x + offset[0], y + offset[1])
        if neighbor is not None and neighbor.shape in shapes:
            linked.add(offset)

    for (first, second), shape in START_PAIRS:
        if first in linked and second in linked:
            start.shape = shape
            break

    return start


def _step_to(grid: PipeGrid, position: Position) -> Tile:
    tile = grid.tile_at(*position)
    if tile is None:
        raise LoopError(f"Loop leaves the maze at {position}")
    return tile


def traverse(grid: PipeGrid, start: Tile, max_steps: Optional[int] = None) -> int:
    """
    Walk the loop from the start tile back to itself, marking every
    visited tile as on the loop.

    Args:
        grid: parsed maze
        start: start tile with its shape already resolved
        max_steps: walk limit (default: number of tiles in the grid)

    Returns:
        Steps to the loop tile farthest from the start
    """
    if max_steps is None:
        max_steps = len(grid)

    links = grid.connections(start)
    if not links:
        raise LoopError(f"Start tile at {start.position} has no pipe shape")

    prev = start
    current = _step_to(grid, links[0])
    current.on_loop = True

    step_count = 0
    while current.position != start.position:
        step_count += 1
        if step_count > max_steps:
            raise LoopError(f"Loop did not close within {max_steps} steps")

        links = grid.connections(current)
        if not links:
            raise LoopError(f"Dead end at {current.position}")

        target = links[0] if links[0] != prev.position else links[1]
        prev, current = current, _step_to(grid, target)
        current.on_loop = True

    return math.ceil(step_count / 2)


# Rendering

def render_tile(tile: Tile, color: bool = True) -> str:
    """Display glyph, wrapped in ANSI colors when requested."""
    glyph = SHAPE_GLYPHS[tile.shape]
    if not color:
        return glyph

    fg = FG_LOOP if tile.on_loop else FG_OTHER
    bg = BG_START if tile.is_start else BG_OTHER
    return f"\x1b[{fg};{bg}m{glyph}\x1b[0m"


def render_grid(grid: PipeGrid, color: bool = True) -> str:
    return '\n'.join(
        ''.join(render_tile(tile, color) for tile in row)
        for row in grid.rows
    )


def render_image(grid: PipeGrid, cell: int = 8) -> Image.Image:
    """
    Draw the maze as an RGB image, one cell x cell square per tile.

    Loop tiles are shaded and drawn in the loop pipe color; the start
    tile gets its own background.
    """
    if cell < 1:
        raise ValueError(f"Cell size must be >= 1, got {cell}")

    arr = np.zeros((grid.height * cell, grid.width * cell, 3), dtype=np.uint8)
    arr[:, :] = IMG_BACKGROUND
    half = max(1, cell // 4) // 2

    for tile in grid.tiles():
        x0, y0 = tile.position[0] * cell, tile.position[1] * cell
        if tile.is_start:
            background = IMG_START
        elif tile.on_loop:
            background = IMG_LOOP
        else:
            background = IMG_GROUND
        arr[y0:y0 + cell, x0:x0 + cell] = background

        pipe = IMG_LOOP_PIPE if tile.on_loop else IMG_PIPE
        cx, cy = x0 + cell // 2, y0 + cell // 2
        for dx, dy in CONNECTIONS[tile.shape]:
            if dx > 0:
                arr[cy - half:cy + half + 1, cx:x0 + cell] = pipe
            elif dx < 0:
                arr[cy - half:cy + half + 1, x0:cx + 1] = pipe
            elif dy > 0:
                arr[cy:y0 + cell, cx - half:cx + half + 1] = pipe
            else:
                arr[y0:cy + 1, cx - half:cx + half + 1] = pipe

    return Image.fromarray(arr, 'RGB')


def scale_image(img: Image.Image, factor: int) -> Image.Image:
    """Blow up every maze pixel into a factor x factor block."""
    if factor == 1:
        return img
    return img.resize(tuple(side * factor for side in img.size), Image.NEAREST)


# File I/O

def read_input(path: str) -> str:
    """Load the maze text; - reads stdin."""
    try:
        if path == '-':
            return sys.stdin.read()
        return Path(path).read_text(encoding='utf-8')
    except FileNotFoundError:
        problem = 'Maze file not found'
    except UnicodeDecodeError:
        problem = 'Maze is not valid UTF-8'

    print(f"Error: {problem}: {path}", file=sys.stderr)
    sys.exit(1)


def solve(text: str) -> Tuple[PipeGrid, int]:
    """Parse a maze, resolve its start and walk the loop."""
    grid = PipeGrid.from_text(text)
    start = resolve_start(grid)
    if start.shape == START:
        print(f"Warning: Cannot infer pipe under start tile at {start.position}",
              file=sys.stderr)
    return grid, traverse(grid, start)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Find the pipe loop through the start tile of a maze',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('-i', '--input', default=DEFAULT_INPUT,
                        help=f'Maze file, - for stdin (default: {DEFAULT_INPUT})')
    source.add_argument('--sample', action='store_true',
                        help='Use the built-in sample maze')

    parser.add_argument('--no-color', action='store_true',
                        help='Print the maze without ANSI colors')
    parser.add_argument('--image',
                        help='Also save the maze as an image (e.g. loop.png)')
    parser.add_argument('-s', '--scale', type=int, default=1,
                        help='Image scale factor (default: 1)')

    args = parser.parse_args(argv)

    if args.scale < 1:
        parser.error('Scale must be >= 1')

    try:
        text = SAMPLE_INPUT if args.sample else read_input(args.input)
        grid, farthest = solve(text)

        print(render_grid(grid, color=not args.no_color))
        print(f"Part 1 result: {farthest}")

        if args.image:
            img = scale_image(render_image(grid), args.scale)
            img.save(args.image)
            print(f"Saved: {args.image}", file=sys.stderr)

    except (StartNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except OSError as e:
        print(f"Error writing image: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    return 0


if __name__ == '__main__':
    sys.exit(main())
