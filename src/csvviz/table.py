from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .errors import UnknownColumn
from .values import ColumnKind, Value

Row = Tuple[Value, ...]


@dataclass(frozen=True)
class Column:
    name: str
    kind: ColumnKind


@dataclass(frozen=True)
class Table:
    """Header plus typed rows. Operations build new tables, never edit one."""

    columns: Tuple[Column, ...]
    rows: Tuple[Row, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'columns', tuple(self.columns))
        object.__setattr__(self, 'rows', tuple(tuple(row) for row in self.rows))

        width = len(self.columns)
        for position, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {position} has {len(row)} values, table has {width} columns"
                )

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.columns]

    def column_index(self, name: str) -> int:
        """Resolve a column name, exactly first, then ignoring case."""
        names = self.names
        if name in names:
            return names.index(name)

        folded = [i for i, n in enumerate(names) if n.lower() == name.lower()]
        if len(folded) != 1:
            raise UnknownColumn(name)
        return folded[0]

    def column(self, name: str) -> Column:
        return self.columns[self.column_index(name)]

    def values(self, name: str) -> List[Value]:
        index = self.column_index(name)
        return [row[index] for row in self.rows]

    def with_rows(self, rows: Iterable[Sequence[Value]]) -> 'Table':
        return Table(columns=self.columns, rows=tuple(tuple(r) for r in rows))

    def records(self) -> List[dict]:
        return [dict(zip(self.names, row)) for row in self.rows]
