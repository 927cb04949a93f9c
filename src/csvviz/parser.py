import csv
import io
import logging
from typing import List, Tuple

from .errors import MalformedInput, RowWidthMismatch
from .table import Column, Table
from .values import infer_kind

logger = logging.getLogger(__name__)


class CSVParser:
    """Turns raw CSV bytes into a typed Table.

    The first record is the header. Every column gets one kind, inferred from
    all of its data fields, and numeric fields that do not parse are stored as
    the kind's sentinel. Records with the wrong field count are skipped and
    remembered in ``row_errors``.
    """

    def __init__(self, encoding: str = 'utf-8-sig') -> None:
        self.encoding = encoding
        self.row_errors: List[RowWidthMismatch] = []

    def parse(self, data: bytes) -> Table:
        self.row_errors = []

        text = self._decode(data)
        header, raw_rows = self._read_records(text)

        columns = []
        for index, name in enumerate(header):
            kind = infer_kind(row[index] for row in raw_rows)
            logger.debug("Column '%s' inferred as %s", name, kind.value)
            columns.append(Column(name=name, kind=kind))

        rows = [
            tuple(column.kind.parse(field) for column, field in zip(columns, row))
            for row in raw_rows
        ]
        return Table(columns=tuple(columns), rows=tuple(rows))

    def _decode(self, data: bytes) -> str:
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise MalformedInput(f"input is not valid {self.encoding}: {e.reason}")

    def _read_records(self, text: str) -> Tuple[List[str], List[List[str]]]:
        reader = csv.reader(io.StringIO(text, newline=''), strict=True)

        header: List[str] = []
        rows: List[List[str]] = []
        try:
            for record in reader:
                # blank line
                if not record or (len(record) == 1 and not record[0].strip()):
                    continue

                if not header:
                    header = self._parse_header(record, reader.line_num)
                    continue

                if len(record) != len(header):
                    error = RowWidthMismatch(reader.line_num, len(header), len(record))
                    logger.warning("Skipping row: %s", error)
                    self.row_errors.append(error)
                    continue

                rows.append(record)
        except csv.Error as e:
            raise MalformedInput(str(e), line=reader.line_num)

        if not header:
            raise MalformedInput("missing header row")

        return header, rows

    @staticmethod
    def _parse_header(record: List[str], line: int) -> List[str]:
        names = [field.strip() for field in record]

        seen = set()
        for name in names:
            if not name:
                raise MalformedInput("empty column name in header", line=line)
            if name in seen:
                raise MalformedInput(f"duplicate column name '{name}'", line=line)
            seen.add(name)

        return names


def parse(data: bytes) -> Table:
    return CSVParser().parse(data)
