"""markdown-it-py / mdformat plugin that tags every link with its syntactic kind.

The stock CommonMark rules produce the same ``link_open`` token for every
link form and no token at all for a reference whose label is undefined.
This plugin wraps the ``link``, ``autolink`` and ``image`` rules so that:

* each ``link_open`` token carries ``meta["kind"]`` (a :class:`LinkKind`);
* ``[text]``, ``[text][]`` and ``[text][label]`` with an undefined label are
  tokenized as links of an ``*_UNKNOWN`` kind, with the raw text after the
  link text kept in ``meta["suffix"]`` so the Markdown renderer can write
  them back exactly as they were.
* image descriptions are parsed by the stock rules only;
* destinations are kept as authored instead of percent-encoded.

The module follows the mdformat parser extension interface
(``update_mdit``, ``RENDERERS``, ``POSTPROCESSORS``).
"""

import re

from markdown_it import MarkdownIt
from markdown_it.common.utils import normalizeReference
from markdown_it.rules_inline import StateInline, autolink, image, link
from markdown_it.token import Token
from mdformat.renderer import DEFAULT_RENDERERS, RenderContext, RenderTreeNode

from mdbook_external_links.rewriter.events import LinkKind

CHANGES_AST = False
MAILTO = "mailto:"

# env key counting the image descriptions being parsed
IMAGE_DEPTH = "external_links_image_depth"

# A bracketed label whose opening bracket follows an even number of backslashes
BRACKETED_LABEL = re.compile(r"(?<!\\)((?:\\\\)*)\[([^\[\]\\]*)\]")


def _find_opener(tokens: list[Token], first: int) -> Token:
    # Pending text may be flushed ahead of the opener
    return next(t for t in tokens[first:] if t.type == "link_open")


def _resolved_kind(suffix: str) -> LinkKind:
    """Classify a resolved link by what follows its text."""
    if not suffix:
        return LinkKind.SHORTCUT
    if suffix.startswith("("):
        return LinkKind.INLINE
    if suffix == "[]":
        return LinkKind.COLLAPSED
    return LinkKind.REFERENCE


def _push_unknown(state: StateInline, label_end: int) -> bool:
    """Tokenize an unresolved reference link starting at ``state.pos``."""
    start = state.pos
    label = state.src[start + 1 : label_end]
    end = label_end + 1
    kind = LinkKind.SHORTCUT_UNKNOWN

    if end < state.posMax and state.src[end] == "[":
        second_end = state.md.helpers.parseLinkLabel(state, end)
        if second_end >= 0:
            if second_end == end + 1:
                kind = LinkKind.COLLAPSED_UNKNOWN
            else:
                kind = LinkKind.REFERENCE_UNKNOWN
                label = state.src[end + 1 : second_end]
            end = second_end + 1

    # Blank labels never form links
    if not normalizeReference(label):
        return False

    maximum = state.posMax
    state.pos = start + 1
    state.posMax = label_end

    token = state.push("link_open", "a", 1)
    token.meta["kind"] = kind
    token.meta["suffix"] = state.src[label_end + 1 : end]

    state.linkLevel += 1
    state.md.inline.tokenize(state)
    state.linkLevel -= 1

    state.push("link_close", "a", -1)

    state.pos = end
    state.posMax = maximum
    return True


def link_with_kind(state: StateInline, silent: bool) -> bool:
    """``link`` rule that records the link kind and keeps unresolved references."""
    if silent or state.env.get(IMAGE_DEPTH):
        # Label scanning and image descriptions see exactly what the stock rule sees
        return link(state, silent)

    start = state.pos
    if state.src[start] != "[":
        return False

    label_end = state.md.helpers.parseLinkLabel(state, start, True)
    if label_end < 0:
        return False

    first = len(state.tokens)
    if link(state, silent):
        opener = _find_opener(state.tokens, first)
        opener.meta["kind"] = _resolved_kind(state.src[label_end + 1 : state.pos])
        return True

    return _push_unknown(state, label_end)


def autolink_with_kind(state: StateInline, silent: bool) -> bool:
    """``autolink`` rule that tells email autolinks from URL autolinks."""
    start = state.pos
    first = len(state.tokens)
    if not autolink(state, silent):
        return False

    if not silent:
        opener = _find_opener(state.tokens, first)
        url = state.src[start + 1 : state.pos - 1]
        href = str(opener.attrs.get("href", ""))
        # The parser adds the scheme itself only for bare addresses
        is_email = href.startswith(MAILTO) and not url.lower().startswith(MAILTO)
        opener.meta["kind"] = LinkKind.EMAIL if is_email else LinkKind.AUTOLINK
    return True


def image_without_unknown_links(state: StateInline, silent: bool) -> bool:
    """``image`` rule whose description is parsed by the stock link rule only."""
    if silent:
        return image(state, silent)

    # The description is tokenized with the same env
    state.env[IMAGE_DEPTH] = state.env.get(IMAGE_DEPTH, 0) + 1
    try:
        return image(state, silent)
    finally:
        state.env[IMAGE_DEPTH] -= 1


def keep_destination(url: str) -> str:
    """Leave link destinations exactly as authored."""
    return url


def update_mdit(mdit: MarkdownIt) -> None:
    """Install the kind-aware link rules."""
    mdit.options["store_labels"] = True
    mdit.normalizeLink = keep_destination
    mdit.inline.ruler.at("link", link_with_kind)
    mdit.inline.ruler.at("autolink", autolink_with_kind)
    mdit.inline.ruler.at("image", image_without_unknown_links)


def _render_link(node: RenderTreeNode, context: RenderContext) -> str:
    kind = node.meta.get("kind")
    if isinstance(kind, LinkKind) and kind.is_unknown:
        text = "".join(child.render(context) for child in node.children)
        return f"[{text}]{node.meta.get('suffix', '')}"
    return DEFAULT_RENDERERS["link"](node, context)


def _in_image(node: RenderTreeNode) -> bool:
    parent = node.parent
    while parent is not None:
        if parent.type == "image":
            return True
        parent = parent.parent
    return False


def _escape_reference_labels(text: str, node: RenderTreeNode, context: RenderContext) -> str:
    """Escape literal ``[label]`` text that would resolve to a reference definition.

    mdformat only escapes labels of references it has already rendered, so
    text ahead of the link using the label would come back as a link.
    """
    references = context.env.get("references", {})
    if not references or _in_image(node):
        return text

    def escape(match: re.Match) -> str:
        backslashes, label = match.groups()
        if normalizeReference(label) not in references:
            return match.group(0)
        return f"{backslashes}\\[{label}\\]"

    return BRACKETED_LABEL.sub(escape, text)


RENDERERS = {"link": _render_link}
POSTPROCESSORS = {"text": _escape_reference_labels}
