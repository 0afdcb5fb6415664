"""Link policy: which links get replaced by raw anchor markup."""

import logging

from mdbook_external_links.rewriter.events import (
    Event,
    LinkClose,
    LinkKind,
    LinkOpen,
    RawMarkup,
)

logger = logging.getLogger(__name__)

CLOSE_ANCHOR = "</a>"

# Link forms that resolve to a destination the prefix test applies to
RESOLVED_KINDS = frozenset(
    {LinkKind.SHORTCUT, LinkKind.INLINE, LinkKind.REFERENCE, LinkKind.COLLAPSED}
)


def is_external(destination: str) -> bool:
    """Return True when the destination looks like an absolute web URL.

    This is a plain prefix test, so ``httpfoo:bar`` counts as external too.
    """
    return destination.startswith("http")


def link_markup(kind: LinkKind, destination: str, title: str = "") -> tuple[str, str] | None:
    """
    Compute the replacement markup for one link.

    Args:
        kind: Syntactic form of the link
        destination: Link target (bare address for email links)
        title: Link title, empty when absent

    Returns:
        ``(open, close)`` raw markup pair, or None to leave the link as is
    """
    if kind in RESOLVED_KINDS:
        if not is_external(destination):
            return None
        # Title goes in verbatim, even when empty
        return f'<a href="{destination}" title="{title}" target="_blank">', CLOSE_ANCHOR
    if kind is LinkKind.EMAIL:
        return f'<a href="mailto:{destination}">', CLOSE_ANCHOR
    if kind is LinkKind.AUTOLINK:
        return f'<a href="{destination}" target="_blank">', CLOSE_ANCHOR
    return None


def rewrite_event(event: Event) -> Event:
    """Map a single event, replacing link boundaries with raw markup where the policy asks."""
    if not isinstance(event, (LinkOpen, LinkClose)):
        return event

    markup = link_markup(event.kind, event.destination, event.title)
    if markup is None:
        return event

    if isinstance(event, LinkOpen):
        logger.debug(f"Rewriting {event.kind.value} link to {event.destination}")
        return RawMarkup(markup[0])
    return RawMarkup(markup[1])


__all__ = ["is_external", "link_markup", "rewrite_event", "RESOLVED_KINDS", "CLOSE_ANCHOR"]
