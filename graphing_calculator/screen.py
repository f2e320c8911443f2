"""
Interactive terminal graphing screen.

Edit an expression in x and watch its braille plot redraw.
Space=Edit | +/-=Zoom | L/R=Pan | 0=Reset | D=Derivative | Esc=Quit
"""

import curses
import logging

from .engine import compile_expression
from .errors import ExpressionError
from .expr import derivative
from .graph import AXIS_COLUMN, BASELINE_ROW, FRAME_WIDTH, PLOT_LEFT, ROWS, render_graph

logger = logging.getLogger(__name__)

# ============================================================================
# GLOBAL STATE
# ============================================================================

DEFAULT_ORIGIN = -6.0
DEFAULT_WIDTH = 12.0

expression = "sin(x) * x"
origin, width = DEFAULT_ORIGIN, DEFAULT_WIDTH

edit_mode = False
show_derivative = False
cursor_pos = 0
error_msg = ""
status_msg = "Space=Edit | +/-=Zoom | L/R=Pan | 0=Reset | D=Derivative | Esc=Quit"

# Color Pairs
COLOR_HEADER = 1
COLOR_EXPR = 2
COLOR_EXPR_ACTIVE = 3
COLOR_ERROR = 4
COLOR_PLOT = 5
COLOR_ZERO = 6
COLOR_DERIV = 7

PLOT_TOP = 5

# ============================================================================
# DRAWING FUNCTIONS
# ============================================================================

def draw_header(stdscr):
    """Draw title and status line"""
    height, screen_width = stdscr.getmaxyx()

    try:
        title = "══ GRAPHING CALCULATOR ══"
        stdscr.addstr(0, max(0, (screen_width - len(title)) // 2), title,
                      curses.color_pair(COLOR_HEADER) | curses.A_BOLD)

        mode_str = "EDIT" if edit_mode else "NAV"
        status_line = f"[{mode_str}] {status_msg}"
        stdscr.addstr(1, 2, status_line[:screen_width - 4], curses.color_pair(COLOR_HEADER))
    except curses.error:
        pass


def draw_expression(stdscr, row):
    """Draw the expression being plotted, with a cursor while editing"""
    height, screen_width = stdscr.getmaxyx()

    try:
        display = expression
        if edit_mode:
            display = expression[:cursor_pos] + "┃" + expression[cursor_pos:]

        line = f" f(x) = {display}"
        attr = curses.color_pair(COLOR_EXPR_ACTIVE if edit_mode else COLOR_EXPR) | curses.A_BOLD
        if error_msg:
            attr = curses.color_pair(COLOR_ERROR)
        stdscr.addstr(row, 2, line[:screen_width - 4], attr)
    except curses.error:
        pass
    return row + 1


def draw_derivative(stdscr, row, tree):
    """Draw f'(x) when toggled on"""
    if not show_derivative or tree is None:
        return row

    height, screen_width = stdscr.getmaxyx()

    try:
        deriv_str = f" f'(x) = {derivative(tree)}"
        stdscr.addstr(row, 2, deriv_str[:screen_width - 4], curses.color_pair(COLOR_DERIV))
    except curses.error:
        pass
    return row + 1


def draw_plot(stdscr, top, graph):
    """Draw axes, labels, zero guide and braille cells of graph"""
    height, screen_width = stdscr.getmaxyx()

    def put(row, column, text, attr=0):
        if top + row >= height - 1 or 2 + column >= screen_width - 1:
            return
        try:
            stdscr.addstr(top + row, 2 + column, text[:screen_width - 3 - column], attr)
        except curses.error:
            pass

    axis_attr = curses.color_pair(COLOR_HEADER)
    for row in range(ROWS):
        put(row, AXIS_COLUMN, "│", axis_attr)
    put(BASELINE_ROW, AXIS_COLUMN, "└" + "─" * (FRAME_WIDTH - PLOT_LEFT), axis_attr)

    if graph.zero_column is not None:
        zero_attr = curses.color_pair(COLOR_ZERO) | curses.A_BOLD
        for row in range(ROWS):
            put(row, graph.zero_column, "┊", zero_attr)

    plot_attr = curses.color_pair(COLOR_PLOT)
    for cell in graph.cells:
        put(cell.row, cell.column, cell.char, plot_attr)

    for label in graph.labels:
        attr = curses.color_pair(COLOR_ZERO) if label.text == "0" else axis_attr
        put(label.row, label.column, label.text, attr)

    return top + BASELINE_ROW + 2


def draw_footer(stdscr):
    """Draw error or view range"""
    height, screen_width = stdscr.getmaxyx()

    try:
        if error_msg:
            stdscr.addstr(height - 1, 2, f"⚠ {error_msg}"[:screen_width - 4],
                          curses.color_pair(COLOR_ERROR) | curses.A_BOLD)
        else:
            range_info = f"x:[{origin:.2f},{origin + width:.2f}] +/-=Zoom L/R=Pan"
            stdscr.addstr(height - 1, 2, range_info[:screen_width - 4], curses.color_pair(COLOR_HEADER))
    except curses.error:
        pass


def draw_screen(stdscr):
    """Main draw function"""
    global error_msg

    stdscr.erase()

    draw_header(stdscr)
    row = draw_expression(stdscr, 3)

    tree = None
    graph = None
    if not edit_mode:
        try:
            tree = compile_expression(expression)
            graph = render_graph(tree, origin, width)
            error_msg = ""
        except ExpressionError as e:
            logger.debug("Not plotting %r: %s", expression, e)
            error_msg = str(e)

    row = draw_derivative(stdscr, row, tree)
    if graph is not None:
        draw_plot(stdscr, max(row + 1, PLOT_TOP), graph)

    draw_footer(stdscr)
    stdscr.refresh()

# ============================================================================
# INPUT HANDLING
# ============================================================================

def handle_editing(key):
    """Handle text editing"""
    global cursor_pos, expression, error_msg

    if key in (curses.KEY_BACKSPACE, 127, 8):
        if cursor_pos > 0:
            expression = expression[:cursor_pos - 1] + expression[cursor_pos:]
            cursor_pos -= 1
    elif key == curses.KEY_DC:
        if cursor_pos < len(expression):
            expression = expression[:cursor_pos] + expression[cursor_pos + 1:]
    elif key == curses.KEY_LEFT:
        cursor_pos = max(0, cursor_pos - 1)
    elif key == curses.KEY_RIGHT:
        cursor_pos = min(len(expression), cursor_pos + 1)
    elif 32 <= key <= 126:
        expression = expression[:cursor_pos] + chr(key) + expression[cursor_pos:]
        cursor_pos += 1
    error_msg = ""


def handle_zoom_pan(key):
    """Handle zoom and pan of the x domain"""
    global origin, width, status_msg

    if key in (ord('+'), ord('=')):
        center = origin + width / 2
        width *= 0.8
        origin = center - width / 2
        status_msg = "Zoomed in"
    elif key in (ord('-'), ord('_')):
        center = origin + width / 2
        width /= 0.8
        origin = center - width / 2
        status_msg = "Zoomed out"
    elif key in (ord('l'), ord('L')):
        origin -= width * 0.2
        status_msg = "Panned left"
    elif key in (ord('r'), ord('R')):
        origin += width * 0.2
        status_msg = "Panned right"
    elif key == ord('0'):
        origin, width = DEFAULT_ORIGIN, DEFAULT_WIDTH
        status_msg = "View reset"


def handle_special_commands(key):
    """Handle mode toggles"""
    global edit_mode, cursor_pos, show_derivative, status_msg

    if key == ord(' ') or key in (10, curses.KEY_ENTER):
        edit_mode = not edit_mode
        if edit_mode:
            cursor_pos = len(expression)
            status_msg = "Editing - Enter to plot"
        else:
            status_msg = "Plotted"
    elif key in (ord('d'), ord('D')):
        show_derivative = not show_derivative
        status_msg = "Derivative " + ("ON" if show_derivative else "OFF")

# ============================================================================
# MAIN LOOP
# ============================================================================

def init_colors():
    """Initialize color pairs"""
    curses.start_color()
    curses.use_default_colors()

    curses.init_pair(COLOR_HEADER, curses.COLOR_CYAN, -1)
    curses.init_pair(COLOR_EXPR, curses.COLOR_WHITE, -1)
    curses.init_pair(COLOR_EXPR_ACTIVE, curses.COLOR_YELLOW, -1)
    curses.init_pair(COLOR_ERROR, curses.COLOR_RED, -1)
    curses.init_pair(COLOR_PLOT, curses.COLOR_MAGENTA, -1)
    curses.init_pair(COLOR_ZERO, curses.COLOR_GREEN, -1)
    curses.init_pair(COLOR_DERIV, curses.COLOR_YELLOW, -1)


def main(stdscr):
    """Main application loop"""
    global edit_mode, status_msg

    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)

    init_colors()
    stdscr.clear()
    draw_screen(stdscr)

    while True:
        key = stdscr.getch()

        if key == 27:  # ESC
            if edit_mode:
                edit_mode = False
                status_msg = "Plotted"
            else:
                break
        elif edit_mode and key not in (10, curses.KEY_ENTER):
            handle_editing(key)
        elif key in (ord('+'), ord('='), ord('-'), ord('_'), ord('l'), ord('L'), ord('r'), ord('R'), ord('0')):
            handle_zoom_pan(key)
        else:
            handle_special_commands(key)

        draw_screen(stdscr)


def run(start_expression=None):
    """Entry point"""
    global expression

    if start_expression:
        expression = start_expression
    try:
        curses.wrapper(main)
    except KeyboardInterrupt:
        pass
