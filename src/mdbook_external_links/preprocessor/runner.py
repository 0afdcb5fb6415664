"""mdBook preprocessor that rewrites external links in every chapter."""

import logging

from mdbook_external_links.config.models import Book, Chapter, PreprocessorContext
from mdbook_external_links.config.settings import PREPROCESSOR_NAME
from mdbook_external_links.rewriter import LinkRewriter, SerializationError

logger = logging.getLogger(__name__)


class PreprocessorError(Exception):
    """Raised when a chapter of the book cannot be rewritten."""

    pass


class ExternalLinksPreprocessor:
    """Adds ``target="_blank"`` to external links across a book."""

    def __init__(self, rewriter: LinkRewriter | None = None) -> None:
        self.rewriter = rewriter if rewriter is not None else LinkRewriter()

    def name(self) -> str:
        return PREPROCESSOR_NAME

    def supports_renderer(self, renderer: str) -> bool:
        """Every renderer is supported; the output is plain Markdown."""
        return True

    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        """
        Rewrite the links of every chapter.

        Args:
            ctx: Build context from mdBook
            book: Book to process

        Returns:
            The book with rewritten chapter contents

        Raises:
            PreprocessorError: If any chapter fails; no chapter is modified then
        """
        logger.info(f"Rewriting links for renderer '{ctx.renderer}'")

        rewritten: list[tuple[Chapter, str]] = []
        for chapter in book.iter_chapters():
            logger.debug(f"Rewriting chapter: {chapter.name}")
            try:
                rewritten.append((chapter, self.rewriter.rewrite(chapter.content)))
            except SerializationError as e:
                raise PreprocessorError(
                    f"Error converting links for chapter '{chapter.name}': {e}"
                ) from e

        for chapter, content in rewritten:
            chapter.content = content

        logger.info(f"Rewrote {len(rewritten)} chapters")
        return book
