"""Markdown event vocabulary consumed and produced by the link rewriter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class LinkKind(Enum):
    """Syntactic form a link was written in."""

    SHORTCUT = "shortcut"  # [text]
    INLINE = "inline"  # [text](dest "title")
    REFERENCE = "reference"  # [text][label]
    COLLAPSED = "collapsed"  # [text][]
    EMAIL = "email"  # <user@example.com>
    AUTOLINK = "autolink"  # <http://example.com>
    REFERENCE_UNKNOWN = "reference_unknown"
    COLLAPSED_UNKNOWN = "collapsed_unknown"
    SHORTCUT_UNKNOWN = "shortcut_unknown"

    @property
    def is_unknown(self) -> bool:
        """True for reference forms whose label could not be resolved."""
        return self in UNKNOWN_KINDS


UNKNOWN_KINDS = frozenset(
    {LinkKind.REFERENCE_UNKNOWN, LinkKind.COLLAPSED_UNKNOWN, LinkKind.SHORTCUT_UNKNOWN}
)


@dataclass(frozen=True)
class LinkOpen:
    """Start of a link."""

    kind: LinkKind
    destination: str
    title: str = ""
    payload: Any = field(default=None, compare=False, repr=False)  # Parser token


@dataclass(frozen=True)
class LinkClose:
    """End of a link; carries the same kind, destination and title as its opener."""

    kind: LinkKind
    destination: str
    title: str = ""
    payload: Any = field(default=None, compare=False, repr=False)  # Parser token


@dataclass(frozen=True)
class Other:
    """Any event unrelated to links, passed through untouched."""

    payload: Any


@dataclass(frozen=True)
class RawMarkup:
    """Literal fragment written to the output without escaping."""

    text: str


Event = Union[LinkOpen, LinkClose, Other, RawMarkup]

__all__ = [
    "LinkKind",
    "UNKNOWN_KINDS",
    "LinkOpen",
    "LinkClose",
    "Other",
    "RawMarkup",
    "Event",
]
