from typing import List

from .errors import EmptyTable, NonNumericColumn
from .table import Table

GRAPH_HEIGHT = 15
GRAPH_WIDTH = 40
X_LABELS = 5


def _scale(value: float, low: float, high: float, steps: int) -> int:
    if low == high:
        return steps // 2
    return int((value - low) / (high - low) * (steps - 1))


def render_line_graph(table: Table, x: str, y: str) -> str:
    """Scatter ``y`` against ``x`` on a character grid, one ``*`` per row."""
    x_column, y_column = table.column(x), table.column(y)
    if not table.rows:
        raise EmptyTable('line graph')
    for column in (x_column, y_column):
        if not column.kind.is_numeric:
            raise NonNumericColumn(column.name)

    points = sorted(zip(table.values(x), table.values(y)), key=lambda p: p[0])
    min_x, max_x = min(p[0] for p in points), max(p[0] for p in points)
    min_y, max_y = min(p[1] for p in points), max(p[1] for p in points)

    grid = [[' '] * GRAPH_WIDTH for _ in range(GRAPH_HEIGHT)]
    for x_val, y_val in points:
        column = _scale(x_val, min_x, max_x, GRAPH_WIDTH)
        # rows count down from the top
        row = GRAPH_HEIGHT // 2 if min_y == max_y else _scale(max_y - y_val, 0, max_y - min_y, GRAPH_HEIGHT)
        grid[row][column] = '*'

    lines: List[str] = [f"y-axis ({y_column.name}) x-axis ({x_column.name})"]
    for i, cells in enumerate(grid):
        if max_y == min_y:
            y_val = max_y
        else:
            y_val = max_y - (i / (GRAPH_HEIGHT - 1)) * (max_y - min_y)
        lines.append(f"{y_val:>6.1f} |{''.join(cells)}")

    lines.append(" " * 8 + "-" * (GRAPH_WIDTH + 1))

    labels = " " * 7
    for i in range(X_LABELS):
        position = (GRAPH_WIDTH - 1) * i // (X_LABELS - 1)
        if min_x == max_x:
            x_val = min_x
        else:
            x_val = min_x + (max_x - min_x) * (i / (X_LABELS - 1))
        if i:
            labels += " " * max(1, position - (len(labels) - 7))
        labels += f"{x_val:>6.1f}"
    lines.append(labels)

    return "\n".join(lines)
