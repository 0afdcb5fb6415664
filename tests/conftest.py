"""Shared fixtures for mdbook-external-links tests."""

import pytest

from mdbook_external_links.config.settings import SUPPORTED_MDBOOK_VERSION
from mdbook_external_links.rewriter import LinkRewriter
from mdbook_external_links.rewriter.parser import MarkdownItParser


@pytest.fixture
def rewriter() -> LinkRewriter:
    return LinkRewriter()


@pytest.fixture
def parser() -> MarkdownItParser:
    return MarkdownItParser()


@pytest.fixture
def context_data() -> dict:
    return {
        "root": "/tmp/book",
        "config": {
            "book": {"authors": ["someone"], "language": "en", "src": "src"},
            "preprocessor": {"external-links": {"command": "mdbook-external-links"}},
        },
        "renderer": "html",
        "mdbook_version": SUPPORTED_MDBOOK_VERSION,
    }


@pytest.fixture
def book_data() -> dict:
    return {
        "sections": [
            {
                "Chapter": {
                    "name": "Intro",
                    "content": "# Intro\n\nSee [the site](https://example.com).\n",
                    "number": [1],
                    "sub_items": [
                        {
                            "Chapter": {
                                "name": "Details",
                                "content": "Back to [intro](./intro.md).\n",
                                "number": [1, 1],
                                "sub_items": [],
                                "path": "details.md",
                                "source_path": "details.md",
                                "parent_names": ["Intro"],
                            }
                        }
                    ],
                    "path": "intro.md",
                    "source_path": "intro.md",
                    "parent_names": [],
                }
            },
            "Separator",
            {"PartTitle": "Reference"},
        ],
        "__non_exhaustive": None,
    }
