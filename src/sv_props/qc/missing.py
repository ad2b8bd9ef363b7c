"""Missing-value detection under the VCF/BCF sentinel conventions.

BCF encodes an unset value in-band:
- Flag: absent (false)
- Float: a reserved NaN bit pattern
- Integer: the most negative value of the field width
- String: empty or "."
"""

import math
from enum import Enum

import numpy as np


class DeclaredType(Enum):
    """Scalar type of a header-declared field."""

    FLAG = "Flag"
    REAL = "Float"
    INT8 = "Integer8"
    INT16 = "Integer16"
    INT32 = "Integer32"
    TEXT = "String"

    @classmethod
    def from_header(cls, type_name: str | None) -> "DeclaredType":
        """Map a header ``Type=`` value to a DeclaredType.

        cyvcf2 hands every integer field back as int32, so a plain
        ``Integer`` declaration maps to INT32.
        """
        if type_name == "Integer":
            return cls.INT32
        if type_name == "Character":
            return cls.TEXT
        for declared in cls:
            if declared.value == type_name:
                return declared
        return cls.TEXT


INT8_MISSING = -(2**7)
INT16_MISSING = -(2**15)
INT32_MISSING = -(2**31)

INT_MISSING = {
    DeclaredType.INT8: INT8_MISSING,
    DeclaredType.INT16: INT16_MISSING,
    DeclaredType.INT32: INT32_MISSING,
}

TEXT_MISSING = {"", "."}


def is_missing(value, declared_type: DeclaredType) -> bool:
    """Return True if value is the missing sentinel for declared_type."""
    if value is None:
        return True
    if declared_type is DeclaredType.FLAG:
        return not value
    if declared_type is DeclaredType.REAL:
        return math.isnan(value)
    if declared_type in INT_MISSING:
        return int(value) == INT_MISSING[declared_type]
    return str(value) in TEXT_MISSING


def missing_mask(values: np.ndarray, declared_type: DeclaredType) -> np.ndarray:
    """Vectorised is_missing over a per-sample array."""
    if declared_type is DeclaredType.REAL:
        return np.isnan(values)
    if declared_type in INT_MISSING:
        return values == INT_MISSING[declared_type]
    if declared_type is DeclaredType.FLAG:
        return ~values.astype(bool)
    return np.array([is_missing(v, declared_type) for v in values], dtype=bool)


def missing_array(n: int, declared_type: DeclaredType) -> np.ndarray:
    """Build an all-missing per-sample array of the declared type."""
    if declared_type is DeclaredType.REAL:
        return np.full(n, np.nan, dtype=np.float32)
    if declared_type in INT_MISSING:
        return np.full(n, INT_MISSING[declared_type], dtype=np.int32)
    if declared_type is DeclaredType.FLAG:
        return np.zeros(n, dtype=bool)
    return np.full(n, ".", dtype=object)
