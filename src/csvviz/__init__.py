from .aggregator import aggregate
from .errors import (
    CSVVizError,
    EmptySelection,
    EmptyTable,
    MalformedInput,
    NonNumericColumn,
    RowWidthMismatch,
    TypeMismatch,
    UnknownColumn,
)
from .parser import CSVParser, parse
from .plot import render_line_graph
from .processor import exclude_columns, filter_table, limit_rows, sort_table
from .renderer import render_csv, render_json, render_table
from .table import Column, Table
from .values import ColumnKind

__version__ = "0.1.0"
