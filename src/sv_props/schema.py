"""Output column layout derived from the input header.

Nine columns are always written. The remaining ones are appended only when
the header declares the annotation they summarise, so the layout is fixed
for the whole file before the first record is read.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .models import AggregateResult, HeaderInfo, SVRecord

Producer = Callable[[SVRecord, AggregateResult], Any]


@dataclass(frozen=True)
class Column:
    """A named output column bound to the value it renders."""

    name: str
    produce: Producer


def _end(record: SVRecord, result: AggregateResult) -> int:
    return record.end if record.end is not None else record.pos


CORE_COLUMNS: tuple[Column, ...] = (
    Column("chr", lambda rec, res: rec.chrom),
    Column("start", lambda rec, res: rec.pos),
    Column("end", _end),
    Column("id", lambda rec, res: rec.id),
    Column("size", lambda rec, res: res.size),
    Column("vac", lambda rec, res: res.alt_count),
    Column("vaf", lambda rec, res: res.allele_frequency),
    Column("singleton", lambda rec, res: res.singleton),
    Column("missingrate", lambda rec, res: res.missing_rate),
)

# (header key, columns gated on it), in output order
OPTIONAL_COLUMNS: tuple[tuple[str, tuple[Column, ...]], ...] = (
    ("SVTYPE", (Column("svtype", lambda rec, res: rec.svtype),)),
    ("IMPRECISE", (Column("precise", lambda rec, res: rec.precise),)),
    ("CIPOS", (Column("ci", lambda rec, res: rec.ci),)),
    (
        "GQ",
        (
            Column("refgq", lambda rec, res: res.ref_gq),
            Column("altgq", lambda rec, res: res.alt_gq),
        ),
    ),
    (
        "RC",
        (
            Column("rdratio", lambda rec, res: res.rd_ratio),
            Column("medianrc", lambda rec, res: res.median_rc),
        ),
    ),
    (
        "DV",
        (
            Column("refratio", lambda rec, res: res.ref_ratio),
            Column("altratio", lambda rec, res: res.alt_ratio),
        ),
    ),
    ("FIC", (Column("fic", lambda rec, res: rec.fic),)),
    ("RSQ", (Column("rsq", lambda rec, res: rec.rsq),)),
    ("HWEpval", (Column("hwepval", lambda rec, res: rec.hwepval),)),
)


@dataclass(frozen=True)
class ColumnSchema:
    """Ordered, immutable set of output columns."""

    columns: tuple[Column, ...]

    @property
    def names(self) -> list[str]:
        return [column.name for column in self.columns]

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)

    def values(self, record: SVRecord, result: AggregateResult) -> list[Any]:
        """Evaluate every column for one record, in schema order."""
        return [column.produce(record, result) for column in self.columns]


def build_schema(header: HeaderInfo) -> ColumnSchema:
    """Build the column layout for a file from its header declarations."""
    columns = list(CORE_COLUMNS)
    for key, gated in OPTIONAL_COLUMNS:
        if header.is_declared(key):
            columns.extend(gated)
    return ColumnSchema(columns=tuple(columns))
