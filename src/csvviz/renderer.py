import csv
import io
import json
from typing import Optional

from tabulate import DataRow, Line, TableFormat, tabulate

from .processor import limit_rows
from .table import Table
from .values import ColumnKind

BOX_FORMAT = TableFormat(
    lineabove=Line("*", "-", "*", "*"),
    linebelowheader=Line("*", "-", "*", "*"),
    linebetweenrows=None,
    linebelow=Line("*", "-", "*", "*"),
    headerrow=DataRow("*", "*", "*"),
    datarow=DataRow("*", "*", "*"),
    padding=1,
    with_header_hide=None,
)

RULE_FORMAT = TableFormat(
    lineabove=Line("", "=", "*", ""),
    linebelowheader=Line("", "=", "*", ""),
    linebetweenrows=None,
    linebelow=Line("", "=", "*", ""),
    headerrow=DataRow("", "*", ""),
    datarow=DataRow("", "*", ""),
    padding=1,
    with_header_hide=None,
)

STYLES = {
    'box': BOX_FORMAT,
    'rule': RULE_FORMAT,
}


def _alignment(kind: ColumnKind, style: str) -> str:
    if style == 'rule' or kind.is_numeric:
        return 'right'
    return 'left'


def render_table(
    table: Table,
    count: Optional[int] = None,
    reverse: bool = False,
    style: str = 'box',
) -> str:
    """Render ``table`` as a bordered fixed-width text table.

    ``reverse`` flips the row order and ``count`` then keeps the first rows;
    neither touches ``table`` itself. Float columns show two decimals.
    """
    if style not in STYLES:
        raise ValueError(f"Unsupported table style: {style}")

    shown = limit_rows(table, count, reverse)
    rows = [
        [column.kind.format(value) for column, value in zip(shown.columns, row)]
        for row in shown.rows
    ]

    return tabulate(
        rows,
        headers=[ColumnKind.TEXT.format(name) for name in shown.names],
        tablefmt=STYLES[style],
        colalign=[_alignment(c.kind, style) for c in shown.columns] if rows else None,
        disable_numparse=True,
    )


def _json_value(kind: ColumnKind, value):
    if kind.is_numeric:
        return float(value)
    return value


def render_json(table: Table, count: Optional[int] = None, reverse: bool = False) -> str:
    shown = limit_rows(table, count, reverse)
    objects = [
        {column.name: _json_value(column.kind, value) for column, value in zip(shown.columns, row)}
        for row in shown.rows
    ]
    return json.dumps(objects, indent=2, ensure_ascii=False, allow_nan=False)


def render_csv(table: Table, count: Optional[int] = None, reverse: bool = False) -> str:
    shown = limit_rows(table, count, reverse)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(shown.names)
    for row in shown.rows:
        writer.writerow([repr(v) if isinstance(v, float) else v for v in row])
    return buffer.getvalue()
