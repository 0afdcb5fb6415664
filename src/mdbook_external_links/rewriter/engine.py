"""Link rewriting engine."""

from mdbook_external_links.rewriter.parser import MarkdownItParser, MarkdownParser
from mdbook_external_links.rewriter.policy import rewrite_event
from mdbook_external_links.rewriter.serializer import MarkdownSerializer, MdformatSerializer


class LinkRewriter:
    """Makes external links in Markdown open in a new browsing context."""

    def __init__(
        self,
        parser: MarkdownParser | None = None,
        serializer: MarkdownSerializer | None = None,
    ) -> None:
        """Initialize rewriter with an event source and a serializer."""
        self.parser = parser if parser is not None else MarkdownItParser()
        self.serializer = serializer if serializer is not None else MdformatSerializer()

    def rewrite(self, source: str) -> str:
        """
        Rewrite the links of one Markdown document.

        Args:
            source: Raw Markdown string

        Returns:
            Markdown with external links replaced by anchor markup

        Raises:
            SerializationError: If the rewritten events cannot be serialized
        """
        events = map(rewrite_event, self.parser.parse(source))
        return self.serializer.serialize(events)
