"""Markdown link rewriting components."""

from .engine import LinkRewriter
from .events import LinkClose, LinkKind, LinkOpen, Other, RawMarkup
from .policy import link_markup, rewrite_event
from .serializer import SerializationError

__all__ = [
    "LinkRewriter",
    "LinkKind",
    "LinkOpen",
    "LinkClose",
    "Other",
    "RawMarkup",
    "SerializationError",
    "link_markup",
    "rewrite_event",
]
