"""Markdown serializer backed by mdformat."""

import logging
from typing import Any, Iterable, Protocol

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdbook_external_links.rewriter.events import Event, LinkClose, LinkOpen, Other, RawMarkup
from mdbook_external_links.rewriter.parser import create_markdown_it

logger = logging.getLogger(__name__)


class SerializationError(Exception):
    """Raised when an event sequence cannot be written back as Markdown."""

    pass


class MarkdownSerializer(Protocol):
    """Anything that turns an event stream back into Markdown text."""

    def serialize(self, events: Iterable[Event]) -> str:
        ...


def _to_token(event: Event) -> Token:
    if isinstance(event, RawMarkup):
        return Token("html_inline", "", 0, content=event.text)

    if isinstance(event, LinkOpen):
        if isinstance(event.payload, Token):
            return event.payload
        attrs: dict[str, Any] = {"href": event.destination}
        if event.title:
            attrs["title"] = event.title
        return Token("link_open", "a", 1, attrs=attrs, meta={"kind": event.kind})

    if isinstance(event, LinkClose):
        if isinstance(event.payload, Token):
            return event.payload
        return Token("link_close", "a", -1)

    if isinstance(event, Other) and isinstance(event.payload, Token):
        return event.payload

    raise SerializationError(f"Cannot serialize event: {event!r}")


def _reference(token: Token) -> tuple[str, dict[str, Any]] | None:
    """Reference definition needed by a label-bearing link or image."""
    label = token.meta.get("label")
    if not label or token.type not in ("link_open", "image"):
        return None
    href = token.attrs.get("href", token.attrs.get("src", ""))
    return label, {"href": href, "title": token.attrs.get("title", "")}


class MdformatSerializer:
    """Writes events back to Markdown with mdformat's renderer."""

    def __init__(self, mdit: MarkdownIt | None = None) -> None:
        self._mdit = mdit if mdit is not None else create_markdown_it()

    def _collect(self, events: Iterable[Event]) -> tuple[list[Token], dict[str, dict[str, Any]]]:
        """Rebuild the block token list and the references still in use."""
        tokens: list[Token] = []
        references: dict[str, dict[str, Any]] = {}
        children: list[Token] | None = None

        for event in events:
            token = _to_token(event)

            if token.block:
                if token.type == "inline":
                    # Parsed tokens stay untouched
                    children = []
                    token = token.copy(children=children)
                else:
                    children = None
                tokens.append(token)
                continue

            if children is None:
                raise SerializationError(
                    f"Inline event outside of an inline block: {token.type}"
                )
            children.append(token)

            reference = _reference(token)
            if reference:
                references.setdefault(*reference)

        return tokens, references

    def serialize(self, events: Iterable[Event]) -> str:
        """
        Render an event stream as Markdown.

        Args:
            events: Document-ordered events

        Returns:
            Markdown text

        Raises:
            SerializationError: If the events do not form a valid document
        """
        tokens, references = self._collect(events)
        env: dict[str, Any] = {"references": references}
        try:
            return self._mdit.renderer.render(tokens, self._mdit.options, env)
        except Exception as e:
            raise SerializationError(f"Markdown serialization failed: {e}") from e


__all__ = ["SerializationError", "MarkdownSerializer", "MdformatSerializer"]
