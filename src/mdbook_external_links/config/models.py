"""Core data models for mdbook-external-links."""

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

# Keys of the mdBook JSON objects this package knows about
_CONTEXT_KEYS = ("root", "config", "renderer", "mdbook_version")
_CHAPTER_KEYS = ("name", "content", "number", "sub_items", "path", "source_path", "parent_names")


@dataclass
class PreprocessorContext:
    """Build context mdBook passes to every preprocessor."""

    root: str  # Book root directory
    config: dict[str, Any] = field(default_factory=dict)  # Parsed book.toml
    renderer: str = "html"  # Renderer the book is being built for
    mdbook_version: str = ""  # Version of the calling mdBook
    extra: dict[str, Any] = field(default_factory=dict)  # Unrecognised keys

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PreprocessorContext":
        """Build from mdBook's JSON form."""
        return cls(
            root=data.get("root", ""),
            config=data.get("config") or {},
            renderer=data.get("renderer", "html"),
            mdbook_version=data.get("mdbook_version", ""),
            extra={k: v for k, v in data.items() if k not in _CONTEXT_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to mdBook's JSON form."""
        return {
            "root": self.root,
            "config": self.config,
            "renderer": self.renderer,
            "mdbook_version": self.mdbook_version,
            **self.extra,
        }


@dataclass
class Separator:
    """Separator line in the book summary."""

    def to_dict(self) -> str:
        return "Separator"


@dataclass
class PartTitle:
    """Part heading in the book summary."""

    title: str

    def to_dict(self) -> dict[str, str]:
        return {"PartTitle": self.title}


@dataclass
class Chapter:
    """A chapter and its nested sub-chapters."""

    name: str
    content: str = ""  # Raw Markdown
    number: list[int] | None = None  # Section number, None for prefix/suffix chapters
    sub_items: list["BookItem"] = field(default_factory=list)
    path: str | None = None  # Path relative to the source directory
    source_path: str | None = None
    parent_names: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)  # Unrecognised keys

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chapter":
        """Build from mdBook's JSON form (the value under the ``Chapter`` key)."""
        return cls(
            name=data.get("name", ""),
            content=data.get("content", ""),
            number=data.get("number"),
            sub_items=[book_item_from_dict(item) for item in data.get("sub_items", [])],
            path=data.get("path"),
            source_path=data.get("source_path"),
            parent_names=list(data.get("parent_names", [])),
            extra={k: v for k, v in data.items() if k not in _CHAPTER_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to mdBook's JSON form."""
        return {
            "Chapter": {
                "name": self.name,
                "content": self.content,
                "number": self.number,
                "sub_items": [item.to_dict() for item in self.sub_items],
                "path": self.path,
                "source_path": self.source_path,
                "parent_names": self.parent_names,
                **self.extra,
            }
        }


BookItem = Union[Chapter, Separator, PartTitle]


def book_item_from_dict(data: Any) -> BookItem:
    """Decode one entry of a section list."""
    if data == "Separator":
        return Separator()
    if isinstance(data, dict):
        if "Chapter" in data:
            return Chapter.from_dict(data["Chapter"])
        if "PartTitle" in data:
            return PartTitle(data["PartTitle"])
    raise ValueError(f"Unknown book item: {data!r}")


@dataclass
class Book:
    """The whole book as handed over by mdBook."""

    sections: list[BookItem] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)  # e.g. __non_exhaustive

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Book":
        """Build from mdBook's JSON form."""
        return cls(
            sections=[book_item_from_dict(item) for item in data.get("sections", [])],
            extra={k: v for k, v in data.items() if k != "sections"},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to mdBook's JSON form."""
        return {"sections": [item.to_dict() for item in self.sections], **self.extra}

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter depth-first, parents before their sub-chapters."""

        def walk(items: list[BookItem]) -> Iterator[Chapter]:
            for item in items:
                if isinstance(item, Chapter):
                    yield item
                    yield from walk(item.sub_items)

        return walk(self.sections)
