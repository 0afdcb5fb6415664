"""mdBook preprocessor components for mdbook-external-links."""

from .protocol import ProtocolError, check_version, parse_input, write_output
from .runner import ExternalLinksPreprocessor, PreprocessorError

__all__ = [
    "ExternalLinksPreprocessor",
    "PreprocessorError",
    "ProtocolError",
    "check_version",
    "parse_input",
    "write_output",
]
