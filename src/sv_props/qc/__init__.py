"""Site-level QC metrics for structural variants."""

from .missing import DeclaredType, is_missing, missing_mask
from .variant_qc import (
    SampleClasses,
    classify_samples,
    compute_allele_frequency,
    compute_missing_rate,
    median,
)

__all__ = [
    "DeclaredType",
    "is_missing",
    "missing_mask",
    "SampleClasses",
    "classify_samples",
    "compute_allele_frequency",
    "compute_missing_rate",
    "median",
]
