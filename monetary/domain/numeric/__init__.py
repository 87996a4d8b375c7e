from .backing import (
    DECIMAL,
    FLOAT32,
    FLOAT64,
    Amount,
    DecimalNumeric,
    Float32Numeric,
    Float64Numeric,
    Numeric,
    convert_value,
    numeric_for,
    numeric_of,
)

__all__ = [
    "Amount",
    "Numeric",
    "DecimalNumeric",
    "Float64Numeric",
    "Float32Numeric",
    "DECIMAL",
    "FLOAT64",
    "FLOAT32",
    "numeric_of",
    "numeric_for",
    "convert_value",
]
