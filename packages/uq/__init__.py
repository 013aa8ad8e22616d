from .core import build_index, index_sources, uq_bytes
from .index import InputTooLarge, OccurrenceIndex, comparison_key
from .io import InputFileError, check_input_file, iter_records, read_sources
from .options import OptionConflict, UqOptions, SEPARATOR_METHODS
from .render import render, write_output
from .sizes import DEFAULT_MAX_INPUT, format_size, parse_size

__all__ = [
    "build_index", "index_sources", "uq_bytes", "render", "write_output",
    "OccurrenceIndex", "UqOptions", "SEPARATOR_METHODS",
    "InputTooLarge", "InputFileError", "OptionConflict",
    "check_input_file", "iter_records", "read_sources",
    "parse_size", "format_size", "DEFAULT_MAX_INPUT",
]
