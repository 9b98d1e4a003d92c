"""Tests for PHPDoc reading and printing."""

from __future__ import annotations

import pytest

from eloquent_generics.models.ast_models import GenericAnnotation
from eloquent_generics.phpdoc import (
    add_return_tag,
    doc_lines,
    is_doc_comment,
    parse_return_tag,
    parse_type_expression,
    render_new_doc_comment,
    replace_return_type,
)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

class TestTypeExpressions:
    def test_plain_name(self):
        assert parse_type_expression("BelongsTo") == GenericAnnotation("BelongsTo")

    def test_generic(self):
        assert parse_type_expression("BelongsTo<Company, self>") == GenericAnnotation(
            "BelongsTo", ("Company", "self"))

    def test_qualified_generic(self):
        parsed = parse_type_expression("\\Illuminate\\Database\\Eloquent\\Relations\\HasMany<Post>")
        assert parsed.base == "\\Illuminate\\Database\\Eloquent\\Relations\\HasMany"
        assert parsed.arguments == ("Post",)

    def test_nested_generic_argument(self):
        parsed = parse_type_expression("Collection<int, HasMany<Post>>")
        assert parsed.arguments == ("int", "HasMany<Post>")

    @pytest.mark.parametrize("raw", [
        "BelongsTo|null",
        "?BelongsTo",
        "HasMany<A>|HasMany<B>",
        "array{id: int}",
        "Foo<>",
        "",
    ])
    def test_other_shapes_are_not_understood(self, raw):
        assert parse_type_expression(raw) is None


class TestReturnTag:
    def test_no_tag(self):
        assert parse_return_tag("/**\n * The company.\n */") is None

    def test_tag_with_description(self):
        doc = "/**\n * @return BelongsTo<Company, self> the owner\n */"
        tag = parse_return_tag(doc)
        assert tag.raw_type == "BelongsTo<Company, self>"
        assert tag.annotation == GenericAnnotation("BelongsTo", ("Company", "self"))
        start, end = tag.span
        assert doc[start:end] == "BelongsTo<Company, self>"

    def test_single_line_comment(self):
        tag = parse_return_tag("/** @return HasMany */")
        assert tag.raw_type == "HasMany"

    def test_returns_is_not_return(self):
        assert parse_return_tag("/**\n * @returns HasMany\n */") is None

    def test_union_kept_raw(self):
        tag = parse_return_tag("/**\n * @return BelongsTo|null\n */")
        assert tag.raw_type == "BelongsTo|null"
        assert tag.annotation is None

    def test_doc_comment_detection(self):
        assert is_doc_comment("/** x */")
        assert not is_doc_comment("/* x */")
        assert not is_doc_comment("// x")


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------

class TestPrinting:
    def test_new_comment(self):
        text = render_new_doc_comment(GenericAnnotation("HasMany", ("Post",)), "    ")
        assert text == "/**\n     * @return HasMany<Post>\n     */"

    def test_new_comment_crlf(self):
        text = render_new_doc_comment(GenericAnnotation("HasMany", ("Post",)), "", "\r\n")
        assert text == "/**\r\n * @return HasMany<Post>\r\n */"

    def test_doc_lines(self):
        doc = "/**\n     * The company.\n     *\n     * @deprecated\n     */"
        assert doc_lines(doc) == ["The company.", "", "@deprecated"]

    def test_add_tag_keeps_existing_lines(self):
        doc = "/**\n     * The company.\n     */"
        out = add_return_tag(doc, GenericAnnotation("BelongsTo", ("Company", "self")), "    ")
        assert out == "/**\n     * The company.\n     * @return BelongsTo<Company, self>\n     */"

    def test_add_tag_to_single_line_comment(self):
        out = add_return_tag("/** The posts. */", GenericAnnotation("HasMany", ("Post",)), "")
        assert out == "/**\n * The posts.\n * @return HasMany<Post>\n */"

    def test_replace_only_touches_the_type(self):
        doc = "/**\n * Owner.\n * @return BelongsTo  the owner\n * @see Company\n */"
        tag = parse_return_tag(doc).with_annotation(GenericAnnotation("BelongsTo", ("Company", "self")))
        assert replace_return_type(doc, tag) == (
            "/**\n * Owner.\n * @return BelongsTo<Company, self>  the owner\n * @see Company\n */"
        )
