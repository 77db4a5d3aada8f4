"""Tests for the summary file grammar."""

import pytest

from vaultbook.errors import SummarySyntaxError
from vaultbook.summarizer.grammar import Heading, Link, ListItem, parse_summary


def shape(nodes) -> list:
    """Reduce parse nodes to nested (name, children) pairs and heading titles."""
    result = []
    for node in nodes:
        if isinstance(node, Heading):
            result.append(node.title)
        else:
            result.append((node.link.name, shape(node.children)))
    return result


class TestHeadingsAndLinks:
    """Tests for top-level headings and list items."""

    def test_parses_sample_summary(self, sample_summary: str):
        nodes = parse_summary(sample_summary)

        assert shape(nodes) == [
            "Getting Started",
            ("Intro", []),
            ("Setup", [("Linux", []), ("Mac", [])]),
            ("Usage", []),
        ]

    def test_heading_fields(self):
        nodes = parse_summary("\n# Part One  \n")

        assert nodes == [Heading(title="Part One", line=2)]

    def test_link_fields(self):
        nodes = parse_summary("- [Chapter 1](./chapter1.md)")

        assert nodes == [
            ListItem(link=Link(name="Chapter 1", path="./chapter1.md", line=1, column=3))
        ]

    def test_nested_link_column(self):
        nodes = parse_summary("- [A](a.md)\n\t- [B](b.md)")

        child = nodes[0].children[0].link
        assert child.line == 2
        assert child.column == 4

    def test_empty_document(self):
        assert parse_summary("") == []
        assert parse_summary("\n\n   \n") == []

    def test_blank_lines_between_nodes(self):
        nodes = parse_summary("- [A](a.md)\n\n\n# Part\n\n- [B](b.md)\n")

        assert shape(nodes) == [("A", []), "Part", ("B", [])]

    def test_windows_line_endings(self):
        nodes = parse_summary("# Part\r\n- [A](a.md)\r\n\t- [B](b.md)\r\n")

        assert shape(nodes) == ["Part", ("A", [("B", [])])]

    def test_trailing_whitespace_after_link(self):
        nodes = parse_summary("- [A](a.md)   \t")

        assert nodes[0].link.path == "a.md"

    def test_empty_path_is_accepted_by_grammar(self):
        nodes = parse_summary("- [A]()")

        assert nodes[0].link.path == ""


class TestNesting:
    """Tests for the indentation stack."""

    def test_tabs_and_spaces_give_same_tree(self):
        tabs = parse_summary("- [A](a.md)\n\t- [B](b.md)\n\t\t- [C](c.md)\n\t- [D](d.md)")
        spaces = parse_summary("- [A](a.md)\n  - [B](b.md)\n    - [C](c.md)\n  - [D](d.md)")

        assert shape(tabs) == shape(spaces)
        assert shape(tabs) == [("A", [("B", [("C", [])]), ("D", [])])]

    def test_four_spaces_per_level(self):
        nodes = parse_summary(
            "- [Chapter 1](./chapter1.md)\n"
            "    - [Chapter 1.1](./chapter1/chapter1.1.md)\n"
            "        - [Chapter 1.1.1](./chapter1/chapter1.1/chapter1.1.1.md)\n"
            "    - [Chapter 1.2](./chapter1/chapter1.2.md)\n"
            "\n"
            "- [Chapter 2](./chapter2.md)\n"
        )

        assert shape(nodes) == [
            ("Chapter 1", [("Chapter 1.1", [("Chapter 1.1.1", [])]), ("Chapter 1.2", [])]),
            ("Chapter 2", []),
        ]

    def test_levels_may_use_different_units(self):
        nodes = parse_summary("- [A](a.md)\n\t- [B](b.md)\n\t  - [C](c.md)\n\t- [D](d.md)")

        assert shape(nodes) == [("A", [("B", [("C", [])]), ("D", [])])]

    def test_return_to_outer_level(self):
        nodes = parse_summary("- [A](a.md)\n\t- [B](b.md)\n\t\t- [C](c.md)\n- [D](d.md)")

        assert shape(nodes) == [("A", [("B", [("C", [])])]), ("D", [])]

    def test_mixed_indentation_in_sibling_group_is_rejected(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md)\n\t- [B](b.md)\n  - [C](c.md)")

        assert exc_info.value.line == 3
        assert exc_info.value.column == 1

    def test_mismatched_deeper_sibling_is_not_attached(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md)\n  - [B](b.md)\n    - [C](c.md)\n   - [D](d.md)")

        assert exc_info.value.line == 4
        assert "indentation" in exc_info.value.message

    def test_odd_space_count_is_rejected(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md)\n   - [B](b.md)")

        assert exc_info.value.line == 2

    def test_blank_line_ends_nested_block(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md)\n\n\t- [B](b.md)")

        assert exc_info.value.line == 3

    def test_indented_heading_is_rejected(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md)\n\t# Heading")

        assert exc_info.value.line == 2
        assert exc_info.value.message == "unexpected indentation"

    def test_heading_ends_list(self):
        nodes = parse_summary("- [A](a.md)\n\t- [B](b.md)\n# Part\n- [C](c.md)")

        assert shape(nodes) == [("A", [("B", [])]), "Part", ("C", [])]
        assert nodes[1] == Heading(title="Part", line=3)

    def test_stack_does_not_leak_between_parses(self):
        parse_summary("- [A](a.md)\n\t- [B](b.md)")
        nodes = parse_summary("- [C](c.md)\n  - [D](d.md)")

        assert shape(nodes) == [("C", [("D", [])])]


class TestSyntaxErrors:
    """Tests for error positions and messages."""

    def test_missing_closing_paren(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [Broken](missing-paren.md")

        error = exc_info.value
        assert error.line == 1
        assert error.column == 28
        assert "')'" in error.message

    def test_missing_closing_bracket(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("# Part\n\n- [Broken(broken.md)")

        assert exc_info.value.line == 3
        assert exc_info.value.column == 10
        assert "']'" in exc_info.value.message

    def test_missing_opening_paren(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [Broken] broken.md")

        assert exc_info.value.column == 11

    def test_error_inside_nested_item(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md)\n\t- [B](b.md")

        assert exc_info.value.line == 2
        assert exc_info.value.column == 12

    def test_bare_link_at_top_level(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("[Intro](./intro.md)")

        assert exc_info.value.column == 1
        assert exc_info.value.message == "expected a heading or a list item"

    def test_plain_text_line(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md)\nSome prose")

        assert exc_info.value.line == 2

    def test_text_after_link(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("- [A](a.md) extra")

        assert exc_info.value.column == 13

    def test_reserved_character_in_heading(self):
        with pytest.raises(SummarySyntaxError) as exc_info:
            parse_summary("# Part (draft)")

        assert exc_info.value.column == 8

    def test_empty_heading(self):
        with pytest.raises(SummarySyntaxError):
            parse_summary("# ")

    def test_source_in_message(self):
        with pytest.raises(SummarySyntaxError, match=r"summary\.md:1:1"):
            parse_summary("oops", source="summary.md")
