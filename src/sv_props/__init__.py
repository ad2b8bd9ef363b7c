"""sv-props: per-site statistics for genotyped structural-variant VCFs."""

__version__ = "0.1.0"
