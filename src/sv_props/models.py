"""Data models for SV records and their per-site statistics."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .qc.missing import DeclaredType


class QualityEncoding(Enum):
    """How FORMAT/GQ is encoded in a given file."""

    INTEGER = "integer"
    REAL = "real"
    ABSENT = "absent"


@dataclass(frozen=True)
class HeaderInfo:
    """Read-only view of the header declarations the statistics depend on."""

    declared: frozenset[str] = frozenset()
    info_types: dict[str, DeclaredType] = field(default_factory=dict)
    format_types: dict[str, DeclaredType] = field(default_factory=dict)
    samples: tuple[str, ...] = ()

    def is_declared(self, key: str) -> bool:
        """Whether any INFO, FORMAT or FILTER line declares this ID."""
        return key in self.declared

    def info_type(self, key: str) -> DeclaredType | None:
        return self.info_types.get(key)

    def format_type(self, key: str) -> DeclaredType | None:
        return self.format_types.get(key)

    @property
    def n_samples(self) -> int:
        return len(self.samples)

    @property
    def quality_encoding(self) -> QualityEncoding:
        """Resolve the GQ encoding; Integer and Float declarations are exclusive."""
        gq_type = self.format_type("GQ")
        if gq_type is DeclaredType.REAL:
            return QualityEncoding.REAL
        if gq_type in (DeclaredType.INT8, DeclaredType.INT16, DeclaredType.INT32):
            return QualityEncoding.INTEGER
        return QualityEncoding.ABSENT


@dataclass
class SVRecord:
    """Represents a single decoded structural-variant record."""

    chrom: str
    pos: int
    id: str = "."

    # Structural attributes
    end: int | None = None
    inslen: int | None = None
    svtype: str | None = None
    cipos: tuple[int, int] | None = None
    precise: bool = False

    # Site-level scores
    fic: float | None = None
    rsq: float | None = None
    hwepval: float | None = None

    # Per-sample data, indexed by header sample order
    genotypes: list[tuple[int, ...]] = field(default_factory=list)
    sample_fields: dict[str, np.ndarray] = field(default_factory=dict)

    @property
    def n_samples(self) -> int:
        return len(self.genotypes)

    @property
    def ci(self) -> int | None:
        """Upper confidence-interval bound around POS."""
        if self.cipos is None or len(self.cipos) < 2:
            return None
        return self.cipos[1]


@dataclass
class EvidenceVectors:
    """Per-class evidence collected for one record."""

    ref_gq: np.ndarray = field(default_factory=lambda: np.empty(0))
    alt_gq: np.ndarray = field(default_factory=lambda: np.empty(0))
    ref_ratio: np.ndarray = field(default_factory=lambda: np.empty(0))
    alt_ratio: np.ndarray = field(default_factory=lambda: np.empty(0))
    ref_rc_ratio: np.ndarray = field(default_factory=lambda: np.empty(0))
    alt_rc_ratio: np.ndarray = field(default_factory=lambda: np.empty(0))
    ref_rc: np.ndarray = field(default_factory=lambda: np.empty(0))


@dataclass
class AggregateResult:
    """Derived statistics for one record."""

    ref_count: int
    alt_count: int
    allele_frequency: float
    missing_rate: float
    singleton: str
    size: int

    # Medians of the evidence vectors
    ref_gq: float = 0.0
    alt_gq: float = 0.0
    ref_ratio: float = 0.0
    alt_ratio: float = 0.0
    rd_ratio: float = 0.0
    median_rc: float = 0.0
