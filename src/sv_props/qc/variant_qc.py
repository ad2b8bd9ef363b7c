"""Genotype classification and robust summaries for SV sites.

Computes per-site population metrics:
- Allele counts over called samples (ref, alt)
- Missing-call rate
- Singleton carrier
- Rank-based (nth element) medians of per-sample evidence
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from ..errors import UnsupportedGenotypeError

NO_CALL = -1
SINGLETON_NA = "NA"


@dataclass
class SampleClasses:
    """Accumulator returned by a single classification pass."""

    ref_count: int = 0
    alt_count: int = 0
    uncalled: int = 0
    singleton_index: int | None = None
    non_carriers: list[int] = field(default_factory=list)
    het_carriers: list[int] = field(default_factory=list)
    hom_alt_carriers: list[int] = field(default_factory=list)

    @property
    def n_called(self) -> int:
        return len(self.non_carriers) + len(self.het_carriers) + len(self.hom_alt_carriers)

    def singleton(self, samples: Sequence[str]) -> str:
        """Name of the only carrier, or "NA" unless exactly one alt allele was seen."""
        if self.alt_count != 1 or self.singleton_index is None:
            return SINGLETON_NA
        return samples[self.singleton_index]


def classify_samples(genotypes: Iterable[Sequence[int]]) -> SampleClasses:
    """Partition samples by genotype class.

    Args:
        genotypes: Per-sample allele index pairs in header order; -1 is a no-call.

    Returns:
        SampleClasses with allele counts and per-class sample indexes.

    Raises:
        UnsupportedGenotypeError: For non-diploid calls or allele indexes outside {0, 1}.
    """
    classes = SampleClasses()

    for idx, call in enumerate(genotypes):
        if not call or any(int(allele) == NO_CALL for allele in call):
            classes.uncalled += 1
            continue
        if len(call) != 2:
            raise UnsupportedGenotypeError(
                f"sample {idx} has a non-diploid genotype call {tuple(call)}"
            )
        a1, a2 = int(call[0]), int(call[1])

        for allele in (a1, a2):
            if allele == 0:
                classes.ref_count += 1
            elif allele == 1:
                classes.alt_count += 1
            else:
                raise UnsupportedGenotypeError(
                    f"sample {idx} has allele index {allele}; only biallelic sites are supported"
                )

        if a1 == a2 == 0:
            classes.non_carriers.append(idx)
        elif a1 != a2:
            classes.het_carriers.append(idx)
            classes.singleton_index = idx
        else:
            classes.hom_alt_carriers.append(idx)

    return classes


def median(values: Sequence[float] | np.ndarray) -> float:
    """Return the element at rank n // 2, or 0 for an empty collection.

    No interpolation is done: for an even count this is the upper of the
    two central values, e.g. median([1, 2, 3, 4]) == 3.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return 0.0
    k = arr.size // 2
    return float(np.partition(arr, k)[k])


def divide(numerator: float, denominator: float) -> float:
    """IEEE division: x/0 gives +-inf and 0/0 gives nan instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def ratio_array(numerator: np.ndarray, denominator: np.ndarray) -> np.ndarray:
    """Element-wise IEEE division of two per-sample arrays."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.asarray(numerator, dtype=np.float64) / np.asarray(denominator, dtype=np.float64)


def compute_allele_frequency(ref_count: int, alt_count: int) -> float:
    """Alt allele frequency = AC_alt / (AC_ref + AC_alt); nan when nothing was called."""
    return divide(alt_count, ref_count + alt_count)


def compute_missing_rate(uncalled: int, n_samples: int) -> float:
    """Fraction of samples without a resolvable genotype call."""
    return divide(uncalled, n_samples)
