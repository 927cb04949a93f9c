import statistics
from typing import Iterable, List, Optional, Sequence

from .errors import EmptySelection, EmptyTable, NonNumericColumn
from .table import Column, Table
from .values import ColumnKind

AGGREGATORS = {
    'mean': lambda values: sum(values) / len(values),
    'median': statistics.median,
}


def select_columns(
    table: Table,
    columns: Optional[Sequence[str]] = None,
    excluded: Iterable[str] = (),
) -> List[int]:
    """Indices of the requested columns (all by default) minus the excluded ones."""
    wanted = [table.column_index(c) for c in columns] if columns else list(range(len(table.columns)))
    dropped = {table.column_index(c) for c in excluded}
    return [i for i in wanted if i not in dropped]


def aggregate(
    table: Table,
    kind: str,
    excluded_columns: Iterable[str] = (),
    columns: Optional[Sequence[str]] = None,
) -> Table:
    """Summarise each selected column into a one-row table of floats.

    Sentinels count as ordinary values: a missing integer contributes 0 and a
    missing float contributes -1.0.
    """
    if kind not in AGGREGATORS:
        raise ValueError(f"Unsupported function: {kind}")

    indices = select_columns(table, columns, excluded_columns)
    if not indices:
        raise EmptySelection(kind)

    # a header-only table infers every column as TEXT
    if not table.rows:
        raise EmptyTable(kind)

    for i in indices:
        if not table.columns[i].kind.is_numeric:
            raise NonNumericColumn(table.columns[i].name)

    function = AGGREGATORS[kind]
    summary = tuple(float(function([row[i] for row in table.rows])) for i in indices)

    return Table(
        columns=tuple(Column(name=table.columns[i].name, kind=ColumnKind.FLOAT) for i in indices),
        rows=(summary,),
    )
