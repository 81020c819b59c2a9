"""Shared maze fixtures."""

import pytest

from pipe_maze import PipeGrid


# Worked example, start at (0, 2), answer 8
SAMPLE_MAZE = """\
7-F7-
.FJ|7
SJLL7
|F--J
LJ.LJ
"""

SAMPLE_LOOP = {
    (0, 2), (0, 3), (0, 4), (1, 4), (1, 3), (2, 3), (3, 3), (4, 3),
    (4, 2), (3, 2), (3, 1), (3, 0), (2, 0), (2, 1), (1, 1), (1, 2),
}

SQUARE_MAZE = """\
.....
.S-7.
.|.|.
.L-J.
.....
"""

# Start in the top-left corner
CORNER_MAZE = "S7\nLJ\n"

# Start has only one connecting neighbor
UNRESOLVED_MAZE = "S-.\n...\n"

NO_START_MAZE = "F7\nLJ\n"

# Walk runs off the bottom edge
OPEN_MAZE = "S-\n|.\n"

# Walk runs into ground at (1, 2)
DEAD_END_MAZE = "S7\n|.\nL.\n"


@pytest.fixture
def sample_grid() -> PipeGrid:
    return PipeGrid.from_text(SAMPLE_MAZE)


@pytest.fixture
def square_grid() -> PipeGrid:
    return PipeGrid.from_text(SQUARE_MAZE)
