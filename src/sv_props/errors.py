"""Exceptions raised by sv-props."""


class SVPropsError(Exception):
    """Base class for sv-props errors."""

    pass


class VCFOpenError(SVPropsError):
    """Raised when the input VCF/BCF cannot be opened."""

    pass


class UnsupportedGenotypeError(SVPropsError):
    """Raised for genotype calls outside the biallelic diploid model."""

    def __init__(self, message: str, record_id: str | None = None, sample: str | None = None):
        super().__init__(message)
        self.record_id = record_id
        self.sample = sample


class ConfigValidationError(SVPropsError):
    """Raised when configuration validation fails."""

    pass
