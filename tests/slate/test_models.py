import json

import pytest

from bard.api.slate import (
    ElementNode,
    ElementType,
    ParseError,
    TextNode,
    dump_document,
    node_string,
    parse_document,
)


class TestParseDocument:
    def test_parses_elements_and_text(self):
        document = parse_document(
            '[{"type": "paragraph", "children": [{"text": "Hello", "bold": true}]}]'
        )

        assert len(document) == 1
        element = document[0]
        assert isinstance(element, ElementNode)
        assert element.kind is ElementType.PARAGRAPH
        assert element.children is not None
        text = element.children[0]
        assert isinstance(text, TextNode)
        assert text.text == "Hello"
        assert text.bold is True
        assert text.italic is None

    def test_parses_nested_quote(self):
        document = parse_document(
            json.dumps(
                [
                    {
                        "type": "quote",
                        "children": [
                            {"type": "paragraph", "children": [{"text": "deep"}]}
                        ],
                    }
                ]
            )
        )

        quote = document[0]
        assert isinstance(quote, ElementNode)
        assert quote.kind is ElementType.QUOTE
        assert isinstance(quote.children[0], ElementNode)
        assert node_string(quote) == "deep"

    def test_accepts_decoded_list(self):
        document = parse_document([{"type": "paragraph", "children": [{"text": ""}]}])
        assert isinstance(document[0], ElementNode)

    def test_link_keeps_url(self):
        document = parse_document(
            '[{"type": "link", "url": "https://getbard.com", "children": [{"text": "Bard"}]}]'
        )
        assert document[0].url == "https://getbard.com"
        assert document[0].kind is ElementType.LINK

    def test_unknown_type_is_other(self):
        document = parse_document('[{"type": "heading-one", "children": []}]')
        assert document[0].kind is ElementType.OTHER
        assert document[0].type == "heading-one"

    def test_element_without_children_is_tolerated(self):
        document = parse_document('[{"type": "paragraph"}]')
        assert document[0].children is None

    def test_empty_document(self):
        assert parse_document("[]") == []

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"type": "paragraph"}',
            '["text"]',
            "[{}]",
            '[{"text": 3}]',
            '[{"text": "leaf", "children": []}]',
            '[{"type": "paragraph", "children": "nope"}]',
        ],
    )
    def test_invalid_content_raises_parse_error(self, raw):
        with pytest.raises(ParseError):
            parse_document(raw)

    def test_parse_error_is_value_error(self):
        assert issubclass(ParseError, ValueError)

    def test_deeply_nested_document(self):
        node: dict = {"text": "deep"}
        for _ in range(110):
            node = {"type": "quote", "children": [node]}

        document = parse_document(json.dumps([node]))

        assert node_string(document[0]) == "deep"
        assert json.loads(dump_document(document)) == [node]


class TestDumpDocument:
    def test_round_trip(self):
        raw = [
            {
                "type": "paragraph",
                "children": [
                    {"text": "plain "},
                    {"text": "bold", "bold": True},
                ],
            },
            {
                "type": "link",
                "url": "https://example.com",
                "children": [{"text": "link"}],
            },
            {"type": "image", "url": "https://example.com/a.png", "children": [{"text": ""}]},
        ]
        document = parse_document(json.dumps(raw))

        assert parse_document(dump_document(document)) == document
        assert json.loads(dump_document(document)) == raw

    def test_unset_fields_are_not_emitted(self):
        document = parse_document('[{"type": "paragraph", "children": [{"text": "a"}]}]')
        assert json.loads(dump_document(document)) == [
            {"type": "paragraph", "children": [{"text": "a"}]}
        ]

    def test_extra_attributes_survive(self):
        raw = [{"type": "paragraph", "align": "center", "children": [{"text": "a"}]}]
        document = parse_document(json.dumps(raw))
        assert json.loads(dump_document(document)) == raw


class TestNodeString:
    def test_concatenates_leaves(self):
        node = ElementNode(
            type="paragraph",
            children=[TextNode(text="Hello, "), TextNode(text="world", bold=True)],
        )
        assert node_string(node) == "Hello, world"

    def test_text_node(self):
        assert node_string(TextNode(text="leaf")) == "leaf"

    def test_element_without_children(self):
        assert node_string(ElementNode(type="paragraph")) == ""
