"""Unit tests for the JSON, YAML, XML and CSV parser adapters."""

import pytest

from treediff.exceptions import ParseError, ValidationError
from treediff.parsers import CsvParser, JsonParser, XmlParser, YamlParser, get_parser
from treediff.tree.nodes import Keyed, LabeledElement, Scalar, Sequence, TextLeaf


@pytest.mark.unit
class TestGetParser:
    """Test parser lookup."""

    @pytest.mark.parametrize(
        "kind,cls",
        [("json", JsonParser), ("yaml", YamlParser), ("xml", XmlParser), ("csv", CsvParser)],
    )
    def test_known_kinds(self, kind, cls):
        assert isinstance(get_parser(kind), cls)

    def test_csv_delimiter(self):
        parser = get_parser("csv", delimiter="\t")
        assert parser.dialect.delimiter == "\t"

    def test_unknown_kind(self):
        with pytest.raises(ValidationError, match="No parser"):
            get_parser("ini")


@pytest.mark.unit
class TestJsonParser:
    """Test JsonParser."""

    def test_parse_object(self):
        node = JsonParser().parse('{"a": [1, true, null], "b": "x"}')
        assert node == Keyed(
            (("a", Sequence((Scalar(1), Scalar(True), Scalar(None)))), ("b", Scalar("x"))),
        )

    def test_duplicate_keys_keep_last(self):
        node = JsonParser().parse('{"a": 1, "a": 2}')
        assert node.as_dict() == {"a": Scalar(2)}

    def test_top_level_scalar(self):
        assert JsonParser().parse('"hello"') == Scalar("hello")

    def test_nan_literal_rejected(self):
        with pytest.raises(ParseError, match="NaN"):
            JsonParser().parse("[NaN]")

    def test_error_reports_side(self):
        with pytest.raises(ParseError) as exc_info:
            JsonParser().parse("{", side="second")
        error = exc_info.value
        assert error.side == "second"
        assert error.message.startswith("File B is not valid JSON: ")
        assert error.original_error is not None

    def test_bytes_input(self):
        assert JsonParser().parse(b"[1]") == Sequence((Scalar(1),))

    def test_non_string_input(self):
        with pytest.raises(ValidationError):
            JsonParser().parse(42)


@pytest.mark.unit
class TestYamlParser:
    """Test YamlParser."""

    def test_parse_mapping(self):
        node = YamlParser().parse("name: x\nitems:\n  - 1\n  - two\n")
        assert node.as_dict()["items"] == Sequence((Scalar(1), Scalar("two")))

    def test_empty_document_is_null(self):
        assert YamlParser().parse("") == Scalar(None)

    def test_dates_become_strings(self):
        node = YamlParser().parse("when: 2024-03-02\n")
        assert node.as_dict()["when"] == Scalar("2024-03-02")

    def test_invalid_yaml(self):
        with pytest.raises(ParseError) as exc_info:
            YamlParser().parse("a: [1, 2\n")
        assert exc_info.value.side == "first"
        assert exc_info.value.message.startswith("File A is not valid YAML: ")


@pytest.mark.unit
class TestXmlParser:
    """Test XmlParser."""

    def test_elements_text_and_attributes(self):
        node = XmlParser().parse('<a x="1">hi<b/>tail</a>')
        assert node == LabeledElement(
            "a",
            (("x", "1"),),
            (TextLeaf("hi"), LabeledElement("b"), TextLeaf("tail")),
        )

    def test_whitespace_is_kept_until_canonicalization(self):
        node = XmlParser().parse("<a>\n  <b/>\n</a>")
        assert node.children == (TextLeaf("\n  "), LabeledElement("b"), TextLeaf("\n"))

    def test_comments_are_skipped(self):
        node = XmlParser().parse("<a><!-- note --><b/></a>")
        assert node.children == (LabeledElement("b"),)

    def test_nested_text_and_tails_keep_document_order(self):
        node = XmlParser().parse("<r>a<x>b<y/>c</x>d<z k='v'/>e</r>")
        assert node == LabeledElement(
            "r",
            (),
            (
                TextLeaf("a"),
                LabeledElement("x", (), (TextLeaf("b"), LabeledElement("y"), TextLeaf("c"))),
                TextLeaf("d"),
                LabeledElement("z", (("k", "v"),)),
                TextLeaf("e"),
            ),
        )

    def test_deeply_nested_document(self):
        node = XmlParser().parse("<a>" * 3000 + "x" + "</a>" * 3000)
        for _ in range(2999):
            [node] = node.children
            assert node.tag == "a"
        assert node.children == (TextLeaf("x"),)

    def test_malformed_xml(self):
        with pytest.raises(ParseError) as exc_info:
            XmlParser().parse("<a><b></a>", side="second")
        assert exc_info.value.side == "second"
        assert exc_info.value.document_kind == "xml"

    def test_entity_expansion_refused(self):
        payload = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE bomb [<!ENTITY a "aaaa"><!ENTITY b "&a;&a;&a;">]>'
            "<bomb>&b;</bomb>"
        )
        with pytest.raises(ParseError):
            XmlParser().parse(payload)


@pytest.mark.unit
class TestCsvParser:
    """Test CsvParser."""

    def test_rows(self):
        assert CsvParser().parse("a,b\n1,2\n") == [("a", "b"), ("1", "2")]

    def test_quoted_fields(self):
        rows = CsvParser().parse('"x,y","say ""hi""","multi\nline"\n')
        assert rows == [("x,y", 'say "hi"', "multi\nline")]

    def test_crlf_line_endings(self):
        assert CsvParser().parse("a\r\nb\r\n") == [("a",), ("b",)]

    def test_custom_delimiter(self):
        assert CsvParser(delimiter=";").parse("a;b\n") == [("a", "b")]

    def test_blank_lines_are_empty_rows(self):
        assert CsvParser().parse("a\n\nb\n") == [("a",), (), ("b",)]
