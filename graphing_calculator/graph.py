"""
Braille dot-matrix plots of an expression over x.

The expression is sampled SAMPLES times across [origin, origin + width],
the finite results set the vertical scale, and every sample becomes a dot.
Each terminal cell is a braille character used as a 2 x 3 dot grid, so two
neighbouring samples share one cell column and each cell row holds three
dot rows.

All positions are frame coordinates: row 0 is the top of the plot, y-axis
labels sit left of AXIS_COLUMN and the plot itself starts at PLOT_LEFT.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from .lerp import lerp_map

logger = logging.getLogger(__name__)

# ============================================================================
# GEOMETRY
# ============================================================================

SAMPLES = 100
COLUMNS = SAMPLES // 2
ROWS = 30
DOTS_PER_CELL = 3
DOT_ROWS = ROWS * DOTS_PER_CELL

AXIS_COLUMN = 10
PLOT_LEFT = AXIS_COLUMN + 1
BASELINE_ROW = ROWS
LABEL_ROW = ROWS + 1
FRAME_WIDTH = PLOT_LEFT + COLUMNS
FRAME_HEIGHT = ROWS + 2

BRAILLE_BASE = 0x2800
AXIS_CHAR = "│"
BASELINE_CHAR = "─"
CORNER_CHAR = "└"
ZERO_CHAR = "┊"


@dataclass(frozen=True)
class Label:
    text: str
    column: int
    row: int


@dataclass(frozen=True)
class Cell:
    """One braille character; mask holds dots 1-6 as bits 0-5"""

    column: int
    row: int
    mask: int

    @property
    def char(self):
        return chr(BRAILLE_BASE + self.mask)


@dataclass
class Graph:
    """Everything a terminal needs to draw one plot"""

    origin: float
    width: float
    minimum: float
    maximum: float
    xs: List[float] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    rows: List[Optional[int]] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    zero_column: Optional[int] = None
    cells: List[Cell] = field(default_factory=list)

    def lines(self):
        """Rasterise the frame into plain strings, trailing blanks stripped"""
        grid = [[" "] * FRAME_WIDTH for _ in range(FRAME_HEIGHT)]

        for row in range(ROWS):
            grid[row][AXIS_COLUMN] = AXIS_CHAR
        for column in range(PLOT_LEFT, FRAME_WIDTH):
            grid[BASELINE_ROW][column] = BASELINE_CHAR
        grid[BASELINE_ROW][AXIS_COLUMN] = CORNER_CHAR

        if self.zero_column is not None:
            for row in range(ROWS):
                grid[row][self.zero_column] = ZERO_CHAR

        for cell in self.cells:
            grid[cell.row][cell.column] = cell.char

        for label in self.labels:
            for offset, char in enumerate(label.text):
                column = label.column + offset
                if 0 <= column < FRAME_WIDTH:
                    grid[label.row][column] = char

        return ["".join(line).rstrip() for line in grid]

    def __str__(self):
        return "\n".join(self.lines())


# ============================================================================
# SAMPLING & SCALING
# ============================================================================

def sample(expr, origin, width, variables=None):
    """Evaluate expr at SAMPLES evenly spaced x values, returning (xs, values)"""
    if variables is None:
        variables = {}

    xs = []
    values = []
    for i in range(SAMPLES):
        x = lerp_map(i, 0, SAMPLES, origin, origin + width)
        # Only ever rebound between evaluations
        variables["x"] = x
        values.append(expr.evaluate(variables))
        xs.append(x)
    return xs, values


def value_range(values):
    """Min and max of the finite values; (nan, nan) if there are none"""
    finite = [value for value in values if math.isfinite(value)]
    if not finite:
        return math.nan, math.nan
    return min(finite), max(finite)


def dot_rows(values, minimum, maximum):
    """
    Floor each value into a dot row in [0, DOT_ROWS), counting up from the bottom.

    Non-finite values get None and are not drawn. A flat range puts every
    sample on the middle row.
    """
    rows = []
    for value in values:
        if not math.isfinite(value):
            rows.append(None)
        elif minimum == maximum:
            rows.append(DOT_ROWS // 2)
        else:
            position = lerp_map(value, minimum, maximum, 0, DOT_ROWS)
            if not math.isfinite(position):
                # min and max too far apart for a float
                rows.append(None)
                continue
            rows.append(min(max(math.floor(position), 0), DOT_ROWS - 1))
    return rows


# ============================================================================
# DRAWING
# ============================================================================

def dot_bit(row, side):
    """Braille bit for a dot row; side 0 is the left dot column, 1 the right"""
    return 1 << (2 - row % DOTS_PER_CELL + DOTS_PER_CELL * side)


def cell_row(row):
    """Frame row of the cell holding a dot row"""
    return ROWS - 1 - row // DOTS_PER_CELL


def braille_cells(rows):
    """Merge pairs of neighbouring samples into braille cells"""
    cells = []
    for index in range(0, len(rows) - 1, 2):
        column = PLOT_LEFT + index // 2
        left, right = rows[index], rows[index + 1]

        if left is not None and right is not None and cell_row(left) == cell_row(right):
            cells.append(Cell(column, cell_row(left), dot_bit(left, 0) | dot_bit(right, 1)))
            continue

        if left is not None:
            cells.append(Cell(column, cell_row(left), dot_bit(left, 0)))
        if right is not None:
            cells.append(Cell(column, cell_row(right), dot_bit(right, 1)))
    return cells


def format_number(value, limit=None):
    """Format with up to 4 significant digits, dropping digits until it fits limit"""
    for precision in (4, 3, 2, 1):
        text = f"{value:.{precision}g}"
        if limit is None or len(text) <= limit:
            break
    return text


def zero_column(origin, width):
    """Frame column of x = 0, or None when it is outside or on the plot's edge"""
    end = origin + width
    if not origin < 0 < end:
        return None
    column = math.floor(lerp_map(0, origin, end, 0, COLUMNS))
    if 0 < column < COLUMNS - 1:
        return PLOT_LEFT + column
    return None


def axis_labels(minimum, maximum, origin, width, zero=None):
    labels = []

    for value, row in ((maximum, 0), (minimum, ROWS - 1)):
        text = format_number(value, AXIS_COLUMN)
        labels.append(Label(text, AXIS_COLUMN - len(text), row))

    labels.append(Label(format_number(origin), PLOT_LEFT, LABEL_ROW))
    end = format_number(origin + width)
    labels.append(Label(end, FRAME_WIDTH - len(end), LABEL_ROW))

    if zero is not None:
        labels.append(Label("0", zero, LABEL_ROW))
    return labels


def render_graph(expr, origin, width, variables=None):
    """
    Sample expr over [origin, origin + width] and lay out its plot.

    Any ExpressionError raised while sampling propagates unchanged.
    """
    xs, values = sample(expr, origin, width, variables)
    minimum, maximum = value_range(values)
    rows = dot_rows(values, minimum, maximum)
    zero = zero_column(origin, width)

    logger.debug("Graph over [%s, %s]: min=%s max=%s", origin, origin + width, minimum, maximum)

    return Graph(
        origin=origin,
        width=width,
        minimum=minimum,
        maximum=maximum,
        xs=xs,
        values=values,
        rows=rows,
        labels=axis_labels(minimum, maximum, origin, width, zero),
        zero_column=zero,
        cells=braille_cells(rows),
    )
