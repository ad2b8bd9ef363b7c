"""Sequential header -> schema -> per-record statistics pipeline."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from .config import PropsConfig
from .errors import UnsupportedGenotypeError
from .models import HeaderInfo, SVRecord
from .qc.site_stats import aggregate_record
from .schema import build_schema
from .vcf_parser import SVReader
from .writer import RowRenderer

logger = logging.getLogger(__name__)


def write_site_properties(
    header: HeaderInfo,
    records: Iterable[SVRecord],
    sink: TextIO,
    config: PropsConfig | None = None,
) -> int:
    """Write the header line and one statistics row per record.

    Returns:
        Number of records written.

    Raises:
        UnsupportedGenotypeError: If a record has a non-biallelic or non-diploid call.
            Rows already written stay valid.
    """
    schema = build_schema(header)
    logger.debug("Output columns: %s", ", ".join(schema.names))

    renderer = RowRenderer(schema, sink, config)
    renderer.write_header()

    for record in records:
        try:
            result = aggregate_record(record, header)
        except UnsupportedGenotypeError as e:
            e.record_id = record.id
            raise
        renderer.write_row(record, result)

    return renderer.rows_written


def process_vcf(vcf_path: Path | str, sink: TextIO, config: PropsConfig | None = None) -> int:
    """Compute site properties for every record of a VCF/BCF file.

    Raises:
        VCFOpenError: If the file cannot be opened.
        UnsupportedGenotypeError: See write_site_properties.
    """
    with SVReader(vcf_path) as reader:
        n_sites = write_site_properties(reader.header, reader, sink, config)

    logger.info("Processed %d sites from %s", n_sites, vcf_path)
    return n_sites
