"""Pure measurement logic shared by the recorder."""

from .catalog import MEASURE_TYPES, known_codes, name_for
from .transform import scaled_value, transform
from .window import fetch_window

__all__ = [
    "MEASURE_TYPES",
    "known_codes",
    "name_for",
    "scaled_value",
    "transform",
    "fetch_window",
]
