import math
import re
from enum import Enum
from typing import Union

Value = Union[int, float, str]

INTEGER_LITERAL = re.compile(r'^[+-]?\d+$')
DECIMAL_LITERAL = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')


def is_integer_literal(text: str) -> bool:
    return INTEGER_LITERAL.match(text.strip()) is not None


def is_decimal_literal(text: str) -> bool:
    return DECIMAL_LITERAL.match(text.strip()) is not None


class ColumnKind(Enum):
    INTEGER = 'integer'
    FLOAT = 'float'
    TEXT = 'text'

    @property
    def is_numeric(self) -> bool:
        return self is not ColumnKind.TEXT

    @property
    def sentinel(self) -> Value:
        """Placeholder stored for a missing or unparseable field."""
        if self is ColumnKind.INTEGER:
            return 0
        if self is ColumnKind.FLOAT:
            return -1.0
        return ''

    def parse(self, raw: str) -> Value:
        text = raw.strip()
        if self is ColumnKind.TEXT:
            return text
        if self is ColumnKind.INTEGER and is_integer_literal(text):
            return int(text)
        if self is ColumnKind.FLOAT and is_decimal_literal(text):
            value = float(text)
            # literals like 1e400 overflow to inf
            if math.isfinite(value):
                return value
        return self.sentinel

    def format(self, value: Value) -> str:
        if self is ColumnKind.FLOAT:
            return f"{value:.2f}"
        if self is ColumnKind.INTEGER and isinstance(value, float):
            return f"{value:.2f}"
        if self is ColumnKind.TEXT:
            # one cell per line
            return value.replace('\r', '\\r').replace('\n', '\\n')
        return str(value)


def infer_kind(fields) -> ColumnKind:
    """Pick the narrowest kind every non-blank field fits.

    Blank fields do not take part in the decision. A column made only of
    blanks stays TEXT.
    """
    present = [f.strip() for f in fields if f.strip()]
    if not present:
        return ColumnKind.TEXT
    if all(is_integer_literal(f) for f in present):
        return ColumnKind.INTEGER
    if all(is_decimal_literal(f) for f in present):
        return ColumnKind.FLOAT
    return ColumnKind.TEXT
