from typing import Iterable, Optional

from .errors import TypeMismatch
from .table import Table
from .values import Value, is_decimal_literal

OPERATORS = {
    "gt": lambda x, y: x > y,
    "gte": lambda x, y: x >= y,
    "lt": lambda x, y: x < y,
    "lte": lambda x, y: x <= y,
    "eq": lambda x, y: x == y,
    "neq": lambda x, y: x != y,
}

DIRECTIONS = ('asc', 'desc')


def sort_table(table: Table, column: str, ascending: bool = True) -> Table:
    """Stable sort by one column; equal rows keep their relative order."""
    index = table.column_index(column)
    rows = sorted(table.rows, key=lambda row: row[index], reverse=not ascending)
    return table.with_rows(rows)


def _coerce_literal(table: Table, column: str, literal: str) -> Value:
    kind = table.column(column).kind
    if not kind.is_numeric:
        return literal
    if not is_decimal_literal(literal):
        raise TypeMismatch(column, kind.value, literal)
    return float(literal)


def filter_table(table: Table, column: str, operator: str, literal: str) -> Table:
    index = table.column_index(column)

    if operator not in OPERATORS:
        raise ValueError(f"Unsupported operator: {operator}")

    compare = OPERATORS[operator]
    typed_literal = _coerce_literal(table, column, str(literal))

    return table.with_rows(row for row in table.rows if compare(row[index], typed_literal))


def exclude_columns(table: Table, excluded: Iterable[str]) -> Table:
    drop = {table.column_index(name) for name in excluded}
    keep = [i for i in range(len(table.columns)) if i not in drop]
    return Table(
        columns=tuple(table.columns[i] for i in keep),
        rows=tuple(tuple(row[i] for i in keep) for row in table.rows),
    )


def limit_rows(table: Table, count: Optional[int] = None, reverse: bool = False) -> Table:
    """Reverse first, then keep the first ``count`` rows."""
    rows = list(table.rows)
    if reverse:
        rows.reverse()
    if count is not None:
        if count < 0:
            raise ValueError(f"Row count must not be negative, got: {count}")
        rows = rows[:count]
    return table.with_rows(rows)
