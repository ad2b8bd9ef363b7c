"""Tab-separated rendering of per-site statistics."""

from typing import Any, TextIO

import numpy as np

from .config import PropsConfig
from .models import AggregateResult, SVRecord
from .schema import ColumnSchema


def format_value(value: Any, float_precision: int = 6, na_value: str = "NA") -> str:
    """Render one cell.

    Floats use %g with float_precision significant digits, so non-finite
    values come out as nan/inf; booleans are written as 1/0.
    """
    if value is None:
        return na_value
    if isinstance(value, bool | np.bool_):
        return "1" if value else "0"
    if isinstance(value, int | np.integer):
        return str(int(value))
    if isinstance(value, float | np.floating):
        return f"{float(value):.{float_precision}g}"
    return str(value)


class RowRenderer:
    """Writes the header line and one line per record in schema order."""

    def __init__(self, schema: ColumnSchema, sink: TextIO, config: PropsConfig | None = None):
        self.schema = schema
        self.sink = sink
        self.config = config or PropsConfig()
        self.rows_written = 0
        self._header_written = False

    def write_header(self) -> None:
        if self._header_written:
            return
        self.sink.write(self.config.delimiter.join(self.schema.names) + "\n")
        self._header_written = True

    def render(self, record: SVRecord, result: AggregateResult) -> str:
        return self.config.delimiter.join(
            format_value(value, self.config.float_precision, self.config.na_value)
            for value in self.schema.values(record, result)
        )

    def write_row(self, record: SVRecord, result: AggregateResult) -> None:
        if not self._header_written:
            self.write_header()
        self.sink.write(self.render(record, result) + "\n")
        self.rows_written += 1


def parse_row(line: str, schema: ColumnSchema, delimiter: str = "\t") -> dict[str, str]:
    """Split a rendered line back into column name -> cell text.

    Raises:
        ValueError: If the line does not have one cell per schema column.
    """
    cells = line.rstrip("\n").split(delimiter)
    if len(cells) != len(schema):
        raise ValueError(f"Expected {len(schema)} columns, got {len(cells)}")
    return dict(zip(schema.names, cells, strict=True))
