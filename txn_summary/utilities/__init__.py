from .config_logging import LOGGING, configure_logging
from .converters_scalar import coerce_decimal, format_decimal, to_decimal, to_str

__all__ = [
    "LOGGING",
    "configure_logging",
    "coerce_decimal",
    "format_decimal",
    "to_decimal",
    "to_str",
]
