"""VCF/BCF decoding into the record abstraction used by the statistics."""

import logging
import re
from collections.abc import Iterator
from pathlib import Path

import numpy as np
from cyvcf2 import VCF

from .errors import UnsupportedGenotypeError, VCFOpenError
from .models import HeaderInfo, SVRecord
from .qc.missing import DeclaredType, is_missing, missing_array

logger = logging.getLogger(__name__)

# FORMAT fields read per sample
SAMPLE_FIELDS = ("GQ", "RC", "RCL", "RCR", "DV", "DR", "RV", "RR")


class VCFHeaderParser:
    """Parser for VCF header declarations."""

    _declaration_pattern = re.compile(r"##(INFO|FORMAT|FILTER)=<(.+)>")

    def parse_header(self, header_lines: list[str], samples: list[str]) -> HeaderInfo:
        """Build a HeaderInfo from raw '##' header lines."""
        declared: set[str] = set()
        info_types: dict[str, DeclaredType] = {}
        format_types: dict[str, DeclaredType] = {}

        for line in header_lines:
            match = self._declaration_pattern.match(line)
            if not match:
                continue
            field_def = self._parse_field_definition(match.group(2))
            if field_def is None:
                continue

            section, field_id = match.group(1), field_def["ID"]
            declared.add(field_id)
            if section == "INFO":
                info_types[field_id] = DeclaredType.from_header(field_def.get("Type"))
            elif section == "FORMAT":
                format_types[field_id] = DeclaredType.from_header(field_def.get("Type"))

        return HeaderInfo(
            declared=frozenset(declared),
            info_types=info_types,
            format_types=format_types,
            samples=tuple(samples),
        )

    def _parse_field_definition(self, field_string: str) -> dict[str, str] | None:
        """Parse a field definition string like 'ID=GQ,Number=1,Type=Integer,Description="..."'"""
        field_def = {}

        # Handle quoted descriptions that may contain commas
        parts = []
        current_part = ""
        in_quotes = False

        for char in field_string:
            if char == '"':
                in_quotes = not in_quotes
                current_part += char
            elif char == "," and not in_quotes:
                parts.append(current_part)
                current_part = ""
            else:
                current_part += char

        if current_part:
            parts.append(current_part)

        for part in parts:
            if "=" in part:
                key, value = part.split("=", 1)
                if key == "Description" and value.startswith('"') and value.endswith('"'):
                    value = value[1:-1]
                field_def[key] = value

        return field_def if "ID" in field_def else None


class VariantParser:
    """Converts cyvcf2 variants into SVRecord objects."""

    def __init__(self, header: HeaderInfo):
        self.header = header
        self._sample_fields = [key for key in SAMPLE_FIELDS if header.format_type(key) is not None]

    def parse_variant(self, variant) -> SVRecord:
        """Parse a cyvcf2 variant; only header-declared fields are read.

        Raises:
            UnsupportedGenotypeError: If a record with samples carries no GT field.
        """
        record_id = variant.ID or "."
        genotypes = self._genotypes(variant, record_id)

        return SVRecord(
            chrom=variant.CHROM,
            pos=variant.POS,
            id=record_id,
            end=self._info_int(variant, "END"),
            inslen=self._info_int(variant, "INSLEN"),
            svtype=self._info_text(variant, "SVTYPE"),
            cipos=self._info_pair(variant, "CIPOS"),
            precise=bool(variant.INFO.get("PRECISE")),
            fic=self._info_float(variant, "FIC"),
            rsq=self._info_float(variant, "RSQ"),
            hwepval=self._info_float(variant, "HWEpval"),
            genotypes=[tuple(call[:-1]) for call in genotypes],
            sample_fields={
                key: self._format_array(variant, key) for key in self._sample_fields
            },
        )

    def _genotypes(self, variant, record_id: str) -> list:
        # Sites-only files have no calls to classify.
        if self.header.n_samples == 0:
            return []
        message = f"no GT field at {variant.CHROM}:{variant.POS}"
        try:
            genotypes = variant.genotypes
        except Exception as e:
            raise UnsupportedGenotypeError(message, record_id=record_id) from e
        if genotypes is None:
            raise UnsupportedGenotypeError(message, record_id=record_id)
        return genotypes

    def _info_value(self, variant, key: str):
        if not self.header.is_declared(key):
            return None
        value = variant.INFO.get(key)
        if isinstance(value, tuple | list):
            value = value[0] if value else None
        declared_type = self.header.info_type(key) or DeclaredType.TEXT
        if is_missing(value, declared_type):
            return None
        return value

    def _info_int(self, variant, key: str) -> int | None:
        value = self._info_value(variant, key)
        return int(value) if value is not None else None

    def _info_float(self, variant, key: str) -> float | None:
        value = self._info_value(variant, key)
        return float(value) if value is not None else None

    def _info_text(self, variant, key: str) -> str | None:
        value = self._info_value(variant, key)
        return str(value) if value is not None else None

    def _info_pair(self, variant, key: str) -> tuple[int, int] | None:
        if not self.header.is_declared(key):
            return None
        value = variant.INFO.get(key)
        if not isinstance(value, tuple | list) or len(value) < 2:
            return None
        return int(value[0]), int(value[1])

    def _format_array(self, variant, key: str) -> np.ndarray:
        """First value per sample; all-missing when the record does not carry the field."""
        declared_type = self.header.format_type(key)
        n_samples = self.header.n_samples
        values = variant.format(key) if n_samples else None
        if values is None:
            return missing_array(n_samples, declared_type)
        values = np.asarray(values)
        if values.ndim > 1:
            values = values[:, 0]
        return values


class SVReader:
    """Forward-only reader over the SV records of a VCF/BCF file."""

    def __init__(self, vcf_path: Path | str):
        self.vcf_path = Path(vcf_path)
        if not self.vcf_path.exists():
            raise VCFOpenError(f"Fail to load {self.vcf_path}: file not found")
        try:
            self._vcf = VCF(str(self.vcf_path))
        except Exception as e:
            raise VCFOpenError(f"Fail to load {self.vcf_path}: {e}") from e

        header_lines = [
            line for line in self._vcf.raw_header.splitlines() if line.startswith("##")
        ]
        self.header = VCFHeaderParser().parse_header(header_lines, list(self._vcf.samples))
        self._parser = VariantParser(self.header)
        logger.debug(
            "Opened %s with %d samples and %d declared header IDs",
            self.vcf_path,
            self.header.n_samples,
            len(self.header.declared),
        )

    def __iter__(self) -> Iterator[SVRecord]:
        for variant in self._vcf:
            yield self._parser.parse_variant(variant)

    def close(self) -> None:
        if self._vcf is not None:
            self._vcf.close()
            self._vcf = None

    def __enter__(self) -> "SVReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
