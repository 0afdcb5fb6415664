"""mdBook preprocessor JSON protocol over stdin/stdout."""

import json
import logging
from typing import IO

from mdbook_external_links.config.models import Book, PreprocessorContext
from mdbook_external_links.config.settings import PREPROCESSOR_NAME, SUPPORTED_MDBOOK_VERSION

logger = logging.getLogger(__name__)


class ProtocolError(Exception):
    """Raised when mdBook's input cannot be understood."""

    pass


def parse_input(stream: IO[str]) -> tuple[PreprocessorContext, Book]:
    """
    Read the ``[context, book]`` pair mdBook writes to a preprocessor.

    Args:
        stream: Text stream holding the JSON document

    Returns:
        Tuple of (context, book)

    Raises:
        ProtocolError: If the input is not valid JSON of the expected shape
    """
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Unable to parse the input: {e}") from e

    if not isinstance(data, list) or len(data) != 2:
        raise ProtocolError("Expected a JSON array of [context, book]")

    ctx_data, book_data = data
    if not isinstance(ctx_data, dict) or not isinstance(book_data, dict):
        raise ProtocolError("Expected a JSON array of [context, book]")

    try:
        return PreprocessorContext.from_dict(ctx_data), Book.from_dict(book_data)
    except ValueError as e:
        raise ProtocolError(f"Invalid book: {e}") from e


def _parse_version(version: str) -> tuple[int, int, int]:
    """Parse ``MAJOR.MINOR.PATCH``, ignoring pre-release and build suffixes."""
    core = version.strip().lstrip("v").split("+")[0].split("-")[0]
    parts = core.split(".")
    try:
        numbers = [int(p) for p in parts]
    except ValueError as e:
        raise ProtocolError(f"Invalid mdbook version: {version!r}") from e
    if not 1 <= len(numbers) <= 3:
        raise ProtocolError(f"Invalid mdbook version: {version!r}")
    numbers += [0] * (3 - len(numbers))
    return numbers[0], numbers[1], numbers[2]


def is_compatible(version: str, supported: str = SUPPORTED_MDBOOK_VERSION) -> bool:
    """Caret compatibility: same left-most non-zero component, not older than supported."""
    actual = _parse_version(version)
    wanted = _parse_version(supported)
    if actual < wanted:
        return False
    if wanted[0] > 0:
        return actual[0] == wanted[0]
    if wanted[1] > 0:
        return actual[:2] == wanted[:2]
    return actual == wanted


def check_version(ctx: PreprocessorContext) -> bool:
    """Warn when called from an mdBook this package was not built against."""
    if is_compatible(ctx.mdbook_version):
        return True
    logger.warning(
        f"The {PREPROCESSOR_NAME} plugin was built against version "
        f"{SUPPORTED_MDBOOK_VERSION} of mdbook, but we're being called from "
        f"version {ctx.mdbook_version}"
    )
    return False


def write_output(book: Book, stream: IO[str]) -> None:
    """Write the processed book back for mdBook."""
    json.dump(book.to_dict(), stream)
    stream.flush()
