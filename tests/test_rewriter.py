"""Tests for the link rewriter."""

import pytest

from mdbook_external_links.rewriter import LinkRewriter
from mdbook_external_links.rewriter.events import (
    LinkClose,
    LinkKind,
    LinkOpen,
    Other,
    RawMarkup,
)


class TestScenarios:
    def test_inline_http_link(self, rewriter):
        output = rewriter.rewrite('[site](http://example.com "Site")')
        assert '<a href="http://example.com" title="Site" target="_blank">site</a>' in output

    def test_relative_link_unchanged(self, rewriter):
        assert rewriter.rewrite("[page](./page.md)").strip() == "[page](./page.md)"

    def test_email_autolink(self, rewriter):
        output = rewriter.rewrite("<user@example.com>")
        assert output.strip() == '<a href="mailto:user@example.com">user@example.com</a>'

    def test_url_autolink(self, rewriter):
        output = rewriter.rewrite("<http://example.com>")
        assert output.strip() == (
            '<a href="http://example.com" target="_blank">http://example.com</a>'
        )

    def test_undefined_reference_unchanged(self, rewriter):
        assert rewriter.rewrite("[text][undefined-ref]").strip() == "[text][undefined-ref]"


class TestLinkForms:
    def test_missing_title_emits_empty_attribute(self, rewriter):
        output = rewriter.rewrite("[site](https://example.com)")
        assert '<a href="https://example.com" title="" target="_blank">site</a>' in output

    def test_reference_link_to_external_site(self, rewriter):
        source = '[site][ex]\n\n[ex]: https://example.com "Ex"\n'
        output = rewriter.rewrite(source)
        assert '<a href="https://example.com" title="Ex" target="_blank">site</a>' in output
        # The rewritten link no longer needs its definition
        assert "[ex]:" not in output

    def test_shortcut_and_collapsed_links(self, rewriter):
        source = "[ex] and [ex][]\n\n[ex]: https://example.com\n"
        output = rewriter.rewrite(source)
        assert output.count('<a href="https://example.com" title="" target="_blank">ex</a>') == 2

    def test_internal_reference_link_keeps_definition(self, rewriter):
        output = rewriter.rewrite("[page][p]\n\n[p]: ./page.md\n")
        assert "[page][p]" in output
        assert "[p]: ./page.md" in output
        assert "<a" not in output

    def test_unknown_forms_unchanged(self, rewriter):
        for source in ("[text]", "[text][]", "[text][nowhere]"):
            assert rewriter.rewrite(source).strip() == source

    def test_anchor_link_unchanged(self, rewriter):
        assert rewriter.rewrite("[top](#top)").strip() == "[top](#top)"

    def test_mixed_paragraph(self, rewriter):
        output = rewriter.rewrite("Read [the docs](https://docs.example.com) or [local](./local.md).")
        assert '<a href="https://docs.example.com" title="" target="_blank">the docs</a>' in output
        assert "[local](./local.md)" in output

    def test_email_has_no_target(self, rewriter):
        output = rewriter.rewrite("Mail <user@example.com> please")
        assert 'href="mailto:user@example.com"' in output
        assert "target" not in output

    def test_autolink_has_no_mailto(self, rewriter):
        output = rewriter.rewrite("<https://example.com/a?b=c>")
        assert 'target="_blank"' in output
        assert "mailto:" not in output

    def test_destinations_not_percent_encoded(self, rewriter):
        assert rewriter.rewrite("[ab](</my page>)\n") == "[ab](</my page>)\n"
        output = rewriter.rewrite("<http://a.org/ä> and [b](https://b.org/a%20b)")
        assert 'href="http://a.org/ä"' in output
        assert 'href="https://b.org/a%20b"' in output
        assert "%C3%A4" not in output


class TestSurroundingMarkup:
    def test_emphasis_around_link_kept(self, rewriter):
        output = rewriter.rewrite("*[x](http://a.org)*")
        assert output.startswith("*")
        assert output.strip().endswith("*")
        assert '<a href="http://a.org" title="" target="_blank">x</a>' in output

    def test_emphasis_inside_link_kept(self, rewriter):
        output = rewriter.rewrite("[**bold** text](http://a.org)")
        assert '<a href="http://a.org" title="" target="_blank">**bold** text</a>' in output

    def test_code_span_not_rewritten(self, rewriter):
        output = rewriter.rewrite("`[x](http://a.org)`")
        assert output.strip() == "`[x](http://a.org)`"

    def test_fenced_code_not_rewritten(self, rewriter):
        source = "```md\n[x](http://a.org)\n```\n"
        assert rewriter.rewrite(source) == source

    def test_link_in_list_and_heading(self, rewriter):
        output = rewriter.rewrite("# [Title](http://a.org)\n\n- [item](http://b.org)\n")
        assert output.startswith('# <a href="http://a.org" title="" target="_blank">Title</a>')
        assert '- <a href="http://b.org" title="" target="_blank">item</a>' in output

    def test_unknown_reference_inside_external_link(self, rewriter):
        output = rewriter.rewrite("[see [x] here](http://a.org)")
        assert '<a href="http://a.org" title="" target="_blank">see [x] here</a>' in output

    def test_brackets_inside_image_description(self, rewriter):
        source = "![alt [x]](img.png) and ![see [x] here](http://x.org/i.png)\n"
        assert rewriter.rewrite(source) == source

    def test_escaped_label_stays_text(self, rewriter, parser):
        source = "\\[a\\] and [a]\n\n[a]: ./local.md\n"
        output = rewriter.rewrite(source)

        assert output == source
        links = [e for e in parser.parse(output) if isinstance(e, LinkOpen)]
        assert len(links) == 1

    def test_escaped_label_before_external_link(self, rewriter):
        output = rewriter.rewrite("\\[a\\] then [a] and [b]\n\n[a]: ./a.md\n[b]: http://b.org\n")
        assert output.startswith('\\[a\\] then [a] and <a href="http://b.org"')
        assert "[a]: ./a.md" in output
        assert "[b]:" not in output


class TestProperties:
    def test_empty_document(self, rewriter):
        assert rewriter.rewrite("") == ""

    @pytest.mark.parametrize(
        "source",
        [
            "# Title\n\nSome *emphasis*, **strong** and `code`.\n\n> quoted\n\n1. one\n2. two\n",
            "Escaped \\*star\\* here\n",
            "- [ ] todo\n- [x] done\n",
            "![alt [x]](img.png)\n",
        ],
    )
    def test_document_without_external_links_keeps_structure(self, rewriter, parser, source):
        output = rewriter.rewrite(source)

        def shape(text):
            return [
                (e.payload.type, e.payload.content if e.payload.type in ("text", "image") else "")
                for e in parser.parse(text)
                if isinstance(e, Other)
            ]

        assert shape(output) == shape(source)

    @pytest.mark.parametrize(
        "source",
        [
            "![alt [x]](img.png)\n",
            "![see [x] here](http://x.org/i.png)\n",
            "*see [x] here*\n",
            "# Heading [x]\n",
            "Use `a[0]` and a[1]\n",
            "[ab](</my page>)\n",
        ],
    )
    def test_source_kept_byte_for_byte(self, rewriter, source):
        assert rewriter.rewrite(source) == source

    def test_rewriting_twice_is_a_no_op(self, rewriter):
        source = (
            '[site](http://example.com "Site"), <http://example.com>, '
            "<user@example.com> and [page](./page.md)\n"
        )
        once = rewriter.rewrite(source)
        assert rewriter.rewrite(once) == once

    def test_rewriter_is_reusable(self, rewriter):
        first = rewriter.rewrite("[a][r]\n\n[r]: http://a.org\n")
        second = rewriter.rewrite("[a][r]")
        assert 'target="_blank"' in first
        assert second.strip() == "[a][r]"


class FakeParser:
    def __init__(self, events):
        self.events = events

    def parse(self, source):
        return iter(self.events)


class RecordingSerializer:
    def __init__(self):
        self.events = None

    def serialize(self, events):
        self.events = list(events)
        return "done"


class TestPluggableBackends:
    def test_events_mapped_one_to_one(self):
        marker = Other("paragraph")
        events = [
            marker,
            LinkOpen(LinkKind.AUTOLINK, "http://a.org"),
            Other("text"),
            LinkClose(LinkKind.AUTOLINK, "http://a.org"),
            LinkOpen(LinkKind.SHORTCUT_UNKNOWN, ""),
            LinkClose(LinkKind.SHORTCUT_UNKNOWN, ""),
        ]
        serializer = RecordingSerializer()
        rewriter = LinkRewriter(FakeParser(events), serializer)

        assert rewriter.rewrite("ignored") == "done"
        assert serializer.events == [
            marker,
            RawMarkup('<a href="http://a.org" target="_blank">'),
            Other("text"),
            RawMarkup("</a>"),
            events[4],
            events[5],
        ]
