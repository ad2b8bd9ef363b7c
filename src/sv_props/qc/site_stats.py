"""Per-site statistics for a single SV record.

Evidence is collected separately for non-carriers (0/0) and heterozygous
carriers (0/1); homozygous-alt samples only count towards allele counts.

- GQ: median per class, a missing GQ counts as 0
- Support ratio: RV/(RV+RR) for PRECISE sites, DV/(DV+DR) otherwise
- Read-depth ratio: median(RC/(RCL+RCR)) of carriers over non-carriers
- Baseline depth: median RC of non-carriers
"""

import logging

import numpy as np

from ..models import AggregateResult, EvidenceVectors, HeaderInfo, QualityEncoding, SVRecord
from .missing import DeclaredType, missing_mask
from .variant_qc import (
    classify_samples,
    compute_allele_frequency,
    compute_missing_rate,
    divide,
    median,
    ratio_array,
)

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 1


def read_quality(record: SVRecord, header: HeaderInfo) -> np.ndarray | None:
    """GQ per sample as floats with missing values replaced by 0.

    The Integer/Float encoding is resolved once here so callers never branch
    on the declared type. Returns None when GQ is not declared.
    """
    encoding = header.quality_encoding
    if encoding is QualityEncoding.ABSENT:
        return None

    raw = record.sample_fields.get("GQ")
    if raw is None:
        return np.zeros(record.n_samples)
    declared_type = DeclaredType.REAL if encoding is QualityEncoding.REAL else DeclaredType.INT32
    return np.where(missing_mask(raw, declared_type), 0.0, raw.astype(np.float64))


def read_counts(record: SVRecord, header: HeaderInfo, key: str) -> np.ndarray:
    """Integer read counts as floats with missing values as nan."""
    raw = record.sample_fields.get(key)
    if raw is None:
        return np.full(record.n_samples, np.nan)
    declared_type = header.format_type(key) or DeclaredType.INT32
    return np.where(missing_mask(raw, declared_type), np.nan, raw.astype(np.float64))


def compute_sv_size(record: SVRecord) -> int:
    """END - POS if END is set, else INSLEN for insertions, else 1."""
    if record.end is not None:
        return record.end - record.pos
    if record.svtype == "INS" and record.inslen is not None:
        return record.inslen
    return DEFAULT_SIZE


def build_evidence(
    record: SVRecord, header: HeaderInfo, ref_idx: np.ndarray, alt_idx: np.ndarray
) -> EvidenceVectors:
    """Collect per-class evidence for the annotations the header declares."""
    evidence = EvidenceVectors()

    quality = read_quality(record, header)
    if quality is not None:
        evidence.ref_gq = quality[ref_idx]
        evidence.alt_gq = quality[alt_idx]

    if header.is_declared("RC"):
        rc = read_counts(record, header, "RC")
        flanks = read_counts(record, header, "RCL") + read_counts(record, header, "RCR")
        rc_ratio = ratio_array(rc, flanks)
        evidence.ref_rc_ratio = rc_ratio[ref_idx]
        evidence.alt_rc_ratio = rc_ratio[alt_idx]
        evidence.ref_rc = rc[ref_idx]

    if header.is_declared("DV"):
        if record.precise:
            alt_reads = read_counts(record, header, "RV")
            ref_reads = read_counts(record, header, "RR")
        else:
            alt_reads = read_counts(record, header, "DV")
            ref_reads = read_counts(record, header, "DR")
        support = ratio_array(alt_reads, ref_reads + alt_reads)
        evidence.ref_ratio = support[ref_idx]
        evidence.alt_ratio = support[alt_idx]

    return evidence


def aggregate_record(record: SVRecord, header: HeaderInfo) -> AggregateResult:
    """Compute the derived statistics of one record.

    Raises:
        UnsupportedGenotypeError: If a called allele is not 0 or 1.
    """
    classes = classify_samples(record.genotypes)
    ref_idx = np.asarray(classes.non_carriers, dtype=np.intp)
    alt_idx = np.asarray(classes.het_carriers, dtype=np.intp)

    evidence = build_evidence(record, header, ref_idx, alt_idx)

    result = AggregateResult(
        ref_count=classes.ref_count,
        alt_count=classes.alt_count,
        allele_frequency=compute_allele_frequency(classes.ref_count, classes.alt_count),
        missing_rate=compute_missing_rate(classes.uncalled, header.n_samples),
        singleton=classes.singleton(header.samples),
        size=compute_sv_size(record),
        ref_gq=median(evidence.ref_gq),
        alt_gq=median(evidence.alt_gq),
        ref_ratio=median(evidence.ref_ratio),
        alt_ratio=median(evidence.alt_ratio),
        rd_ratio=divide(median(evidence.alt_rc_ratio), median(evidence.ref_rc_ratio)),
        median_rc=median(evidence.ref_rc),
    )

    logger.debug(
        "%s: ref=%d alt=%d uncalled=%d het=%d",
        record.id,
        classes.ref_count,
        classes.alt_count,
        classes.uncalled,
        len(classes.het_carriers),
    )
    return result
