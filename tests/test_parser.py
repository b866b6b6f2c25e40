"""Tests for the filter parser."""

import pytest
from odata_query import ast
from odata_query import exceptions as ex

from sta_temporal.exceptions import (
    FilterSyntaxError,
    MalformedInterval,
    MalformedLiteral,
)
from sta_temporal.sta2rest.sta_parser import ast as sta_ast
from sta_temporal.sta2rest.sta_parser.parser import parse_filter

T700 = "2016-01-01T07:00:00.000Z"
T800 = "2016-01-01T08:00:00.000Z"
I700_800 = f"{T700}/{T800}"


def lt(name, value):
    return ast.Compare(ast.Lt(), ast.Identifier(name), ast.DateTime(value))


class TestParser:
    def test_comparison(self) -> None:
        assert parse_filter(f"validTime lt {T700}") == lt("validTime", T700)

    def test_interval_literal(self) -> None:
        assert parse_filter(f"phenomenonTime eq {I700_800}") == ast.Compare(
            ast.Eq(), ast.Identifier("phenomenonTime"), sta_ast.Interval(I700_800)
        )

    def test_arithmetic_binds_tighter_than_comparison(self) -> None:
        assert parse_filter(f"validTime gt {T700} sub duration'P1D'") == ast.Compare(
            ast.Gt(),
            ast.Identifier("validTime"),
            ast.BinOp(ast.Sub(), ast.DateTime(T700), ast.Duration("P1D")),
        )

    def test_and_binds_tighter_than_or(self) -> None:
        node = parse_filter(
            f"validTime lt {T700} or validTime lt {T800} and resultTime lt {T700}"
        )
        assert node == ast.BoolOp(
            ast.Or(),
            lt("validTime", T700),
            ast.BoolOp(ast.And(), lt("validTime", T800), lt("resultTime", T700)),
        )

    def test_not_binds_tighter_than_and(self) -> None:
        node = parse_filter(f"not validTime lt {T700} and resultTime lt {T700}")
        assert node == ast.BoolOp(
            ast.And(),
            ast.UnaryOp(ast.Not(), lt("validTime", T700)),
            lt("resultTime", T700),
        )

    def test_parentheses(self) -> None:
        node = parse_filter(
            f"(validTime lt {T700} or validTime lt {T800}) and resultTime lt {T700}"
        )
        assert isinstance(node, ast.BoolOp)
        assert isinstance(node.op, ast.And)
        assert isinstance(node.left.op, ast.Or)

    def test_function_call(self) -> None:
        assert parse_filter(f"DURING(validTime,{I700_800})") == ast.Call(
            ast.Identifier("during"),
            [ast.Identifier("validTime"), sta_ast.Interval(I700_800)],
        )

    def test_null_and_boolean(self) -> None:
        assert parse_filter("validTime eq null") == ast.Compare(
            ast.Eq(), ast.Identifier("validTime"), ast.Null()
        )
        assert parse_filter("true") == ast.Boolean("true")


class TestParserErrors:
    def test_unknown_function(self) -> None:
        with pytest.raises(ex.UnsupportedFunctionException):
            parse_filter(f"contains(validTime,{T700})")

    def test_wrong_arity(self) -> None:
        with pytest.raises(FilterSyntaxError):
            parse_filter("during(validTime)")

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            f"(validTime lt {T700}",
            f"validTime lt {T700} {T800}",
            "validTime lt",
            f"before(validTime {T700})",
            f"validTime lt lt {T700}",
        ],
    )
    def test_syntax_errors(self, text) -> None:
        with pytest.raises(FilterSyntaxError):
            parse_filter(text)

    @pytest.mark.parametrize(
        "text",
        [
            "validTime lt 2016-01-01T07:00:00",
            "validTime lt 2016-02-30T07:00:00Z",
            "validTime add duration'P' lt 2016-01-01T07:00:00Z",
        ],
    )
    def test_malformed_literals(self, text) -> None:
        with pytest.raises(MalformedLiteral):
            parse_filter(text)

    def test_reversed_interval(self) -> None:
        with pytest.raises(MalformedInterval):
            parse_filter(f"validTime lt {T800}/{T700}")
