"""Markdown event source backed by markdown-it-py."""

from typing import Iterable, Iterator, Protocol

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdformat.renderer import MDRenderer

from mdbook_external_links.rewriter import extensions
from mdbook_external_links.rewriter.events import Event, LinkClose, LinkKind, LinkOpen, Other


class MarkdownParser(Protocol):
    """Anything that turns Markdown text into a link-aware event stream."""

    def parse(self, source: str) -> Iterator[Event]:
        ...


def create_markdown_it() -> MarkdownIt:
    """Create a CommonMark parser whose tokens can be rendered back to Markdown."""
    mdit = MarkdownIt("commonmark", renderer_cls=MDRenderer)
    mdit.options["mdformat"] = {}
    mdit.options["parser_extension"] = [extensions]
    mdit.options["codeformatters"] = {}
    extensions.update_mdit(mdit)
    return mdit


def _classify(token: Token) -> LinkKind:
    kind = token.meta.get("kind")
    if isinstance(kind, LinkKind):
        return kind
    # Links from rules the plugin does not wrap (e.g. linkify)
    if token.info == "auto":
        return LinkKind.AUTOLINK
    return LinkKind.REFERENCE if token.meta.get("label") else LinkKind.INLINE


def _link_open(token: Token) -> LinkOpen:
    kind = _classify(token)
    destination = str(token.attrs.get("href", ""))
    if kind is LinkKind.EMAIL and destination.startswith(extensions.MAILTO):
        destination = destination[len(extensions.MAILTO) :]
    title = str(token.attrs.get("title", ""))
    return LinkOpen(kind, destination, title, payload=token)


def _inline_events(children: Iterable[Token]) -> Iterator[Event]:
    openers: list[LinkOpen] = []
    for token in children:
        if token.type == "link_open":
            opener = _link_open(token)
            openers.append(opener)
            yield opener
        elif token.type == "link_close":
            opener = openers.pop()
            yield LinkClose(opener.kind, opener.destination, opener.title, payload=token)
        else:
            yield Other(token)


def token_events(tokens: Iterable[Token]) -> Iterator[Event]:
    """Flatten a markdown-it token list into document-ordered events.

    Every ``inline`` block token is immediately followed by the events of
    its children.
    """
    for token in tokens:
        yield Other(token)
        if token.type == "inline" and token.children:
            yield from _inline_events(token.children)


class MarkdownItParser:
    """Produces link events from Markdown using markdown-it-py."""

    def __init__(self, mdit: MarkdownIt | None = None) -> None:
        self._mdit = mdit if mdit is not None else create_markdown_it()

    def parse(self, source: str) -> Iterator[Event]:
        """
        Parse Markdown into a lazy event stream.

        Args:
            source: Raw Markdown string

        Returns:
            Iterator over the document's events
        """
        # Fresh env per call: reference definitions never leak between documents
        tokens = self._mdit.parse(source, {})
        return token_events(tokens)


__all__ = ["MarkdownParser", "MarkdownItParser", "create_markdown_it", "token_events"]
