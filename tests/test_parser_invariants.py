from __future__ import annotations

from typing import List

import pytest

from tests.support.harness import (
    TT,
    ParseError,
    Parser,
    Tok,
    check_parse_error,
    parse,
    parse_source,
    shape,
    tokenize,
    toks,
)

# Inputs where a unary sign meets an identical sign operator through the
# parser's sign state.
REJECTED_SIGN_CASES: List[str] = [
    "1++2",
    "1--2",
    "1 - -2",
    "3 + +4",
    "--3",
    "++3",
    "---5",
    "-(1) - -2",
    "2 * (1--2)",
    "1 - 2 - -3",
    # The sign state is restored after a parenthesized factor, so the binary
    # minus is still visible to the unary minus after `*`.
    "3 - (1) * -2",
]

ACCEPTED_SIGN_CASES: List[str] = [
    "1+-2",
    "1-+2",
    "-+3",
    "+-3",
    "-(-3)",
    "+(+3)",
    "1 - (-2)",
    "2*-3",
    "2/+3",
    "3 - 2 * -1",
    "-3 - 4",
    "(1 - 2) - 3",
]


@pytest.mark.parametrize("source", REJECTED_SIGN_CASES, ids=lambda s: s)
def test_consecutive_identical_signs_rejected(source: str) -> None:
    check_parse_error(source, "consecutive")


@pytest.mark.parametrize("source", ACCEPTED_SIGN_CASES, ids=lambda s: s)
def test_mixed_or_separated_signs_accepted(source: str) -> None:
    parse_source(source)


def test_sign_rule_ignores_whitespace() -> None:
    first = check_parse_error("1--2")
    second = check_parse_error("1 -   -2")

    assert first.message == second.message == "Unexpected token: consecutive - operators"


def test_sign_rule_message_names_operator() -> None:
    err = check_parse_error("1++2")

    assert err.message == "Unexpected token: consecutive + operators"
    assert err.token is not None
    assert err.token.type == TT.PLUS


def test_multiply_divide_do_not_touch_sign_state() -> None:
    parser = Parser(toks("2", "*", "-", "3"))
    parser.parse()

    assert parser.last_op is None


def test_sign_state_restored_after_parse() -> None:
    parser = Parser(toks("-", "(", "1", "+", "-", "2", ")"))
    root = parser.parse()

    assert shape(root) == "(- (+ 1 (- 2)))"
    assert parser.last_op is None


@pytest.mark.parametrize(
    "source",
    ["1", "2+3*4", "(2+3)*4", "-(1-+2)/3", "8-3-2"],
    ids=lambda s: s,
)
def test_parse_consumes_every_token(source: str) -> None:
    tokens = tokenize(source)
    parser = Parser(tokens)
    parser.parse()

    assert parser.current.type == TT.EOF
    assert parser.pos == len(tokens) - 1


def test_explicit_eof_is_optional() -> None:
    without_eof = toks("2", "+", "3", "*", "4")
    with_eof = without_eof + [Tok.of(TT.EOF)]

    assert parse(without_eof) == parse(with_eof)
    assert shape(parse(without_eof)) == "(+ 2 (* 3 4))"


def test_advance_is_idempotent_at_eof() -> None:
    parser = Parser(toks("1"))

    assert parser.advance().type == TT.NUMBER
    for _ in range(3):
        assert parser.current.type == TT.EOF
        parser.advance()
    assert parser.current.type == TT.EOF


def test_empty_token_list_is_eof() -> None:
    parser = Parser([])

    assert parser.current.type == TT.EOF
    with pytest.raises(ParseError, match="end of input"):
        parser.parse()


def test_expect_consumes_matching_kind() -> None:
    parser = Parser(toks("(", "1"))
    tok = parser.expect(TT.LPAREN)

    assert tok.type == TT.LPAREN
    assert parser.current.type == TT.NUMBER


def test_expect_reports_expected_and_actual() -> None:
    parser = Parser(toks("1"))

    with pytest.raises(ParseError) as exc_info:
        parser.expect(TT.RPAREN)

    assert str(exc_info.value) == "Expected RPAREN, got NUMBER"
    assert parser.pos == 0


def test_parser_borrows_tokens_without_mutation() -> None:
    tokens = tokenize("(1+2)*3")
    snapshot = list(tokens)
    parse(tokens)

    assert tokens == snapshot
