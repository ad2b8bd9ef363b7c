"""Pytest configuration and fixtures for sv-props tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.vcf_generator import (  # noqa: E402
    SVVCFGenerator,
    SyntheticSV,
    delly_sample,
    make_deletion_vcf_file,
)

from sv_props.models import HeaderInfo, SVRecord  # noqa: E402
from sv_props.qc.missing import DeclaredType  # noqa: E402

INT = DeclaredType.INT32

DELLY_INFO_TYPES = {
    "END": INT,
    "SVTYPE": DeclaredType.TEXT,
    "INSLEN": INT,
    "CIPOS": INT,
    "PRECISE": DeclaredType.FLAG,
    "IMPRECISE": DeclaredType.FLAG,
    "FIC": DeclaredType.REAL,
    "RSQ": DeclaredType.REAL,
    "HWEpval": DeclaredType.REAL,
}

DELLY_FORMAT_TYPES = {
    "GT": DeclaredType.TEXT,
    "GQ": INT,
    "RC": INT,
    "RCL": INT,
    "RCR": INT,
    "DR": INT,
    "DV": INT,
    "RR": INT,
    "RV": INT,
}


def make_header(
    samples: list[str],
    exclude: set[str] | None = None,
    gq_type: DeclaredType = INT,
) -> HeaderInfo:
    """HeaderInfo with the Delly INFO/FORMAT declarations, minus exclude."""
    exclude = exclude or set()
    info_types = {k: v for k, v in DELLY_INFO_TYPES.items() if k not in exclude}
    format_types = {k: v for k, v in DELLY_FORMAT_TYPES.items() if k not in exclude}
    if "GQ" in format_types:
        format_types["GQ"] = gq_type
    return HeaderInfo(
        declared=frozenset(info_types) | frozenset(format_types) | {"PASS"},
        info_types=info_types,
        format_types=format_types,
        samples=tuple(samples),
    )


def make_record(genotypes: list[tuple[int, int]], **kwargs) -> SVRecord:
    """SVRecord with per-sample arrays built from plain lists."""
    sample_fields = {
        key: np.asarray(values) for key, values in kwargs.pop("sample_fields", {}).items()
    }
    defaults = {"chrom": "chr1", "pos": 1000, "id": "SV1"}
    defaults.update(kwargs)
    return SVRecord(genotypes=genotypes, sample_fields=sample_fields, **defaults)


@pytest.fixture
def header_factory():
    """Factory for HeaderInfo instances."""
    return make_header


@pytest.fixture
def record_factory():
    """Factory for SVRecord instances."""
    return make_record


@pytest.fixture
def sv_vcf_generator():
    """Provide SVVCFGenerator class for tests."""
    return SVVCFGenerator


@pytest.fixture
def synthetic_sv_factory():
    """Factory for creating SyntheticSV instances."""

    def _factory(**kwargs):
        defaults = {
            "chrom": "chr1",
            "pos": 1000,
            "sv_id": "DEL00000001",
        }
        defaults.update(kwargs)
        return SyntheticSV(**defaults)

    return _factory


@pytest.fixture
def delly_sample_factory():
    return delly_sample


@pytest.fixture
def deletion_vcf_file(tmp_path):
    """Four-sample SV VCF with a deletion and an insertion."""
    return make_deletion_vcf_file(directory=tmp_path)
