"""mdbook-external-links: open external links of an mdBook in a new tab."""

__version__ = "0.1.0"
__author__ = "mdbook-external-links contributors"
__license__ = "MIT"

from mdbook_external_links.rewriter import (
    LinkKind,
    LinkRewriter,
    SerializationError,
)

__all__ = [
    "LinkKind",
    "LinkRewriter",
    "SerializationError",
    "__version__",
]
