from typing import Optional


class CSVVizError(ValueError):
    """Base class for every failure the table engine reports."""


class MalformedInput(CSVVizError):
    def __init__(self, reason: str, line: Optional[int] = None) -> None:
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"Malformed CSV input{where}: {reason}")
        self.line = line
        self.reason = reason


class RowWidthMismatch(CSVVizError):
    """A data record with a different field count than the header.

    Row-local: the parser skips the record and keeps going.
    """

    def __init__(self, line: int, expected: int, actual: int) -> None:
        super().__init__(
            f"Row at line {line} has {actual} fields, header has {expected}"
        )
        self.line = line
        self.expected = expected
        self.actual = actual


class UnknownColumn(CSVVizError):
    def __init__(self, column: str) -> None:
        super().__init__(f"'{column}' not found in data columns")
        self.column = column


class TypeMismatch(CSVVizError):
    def __init__(self, column: str, kind: str, literal: str) -> None:
        super().__init__(
            f"Value {literal!r} cannot be compared with {kind} column '{column}'"
        )
        self.column = column
        self.kind = kind
        self.literal = literal


class NonNumericColumn(CSVVizError):
    def __init__(self, column: str) -> None:
        super().__init__(f"Column '{column}' is not numeric")
        self.column = column


class EmptyTable(CSVVizError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot compute {operation} of a table with no rows")
        self.operation = operation


class EmptySelection(CSVVizError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"No valid columns passed to {operation}")
        self.operation = operation
