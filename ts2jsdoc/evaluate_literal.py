"""Side-effect-free evaluation of literal default values.

Only a small grammar is understood: numbers (with an optional sign, hex, octal
and binary forms and ``_`` separators), single or double quoted strings,
``true``, ``false``, ``null``, ``undefined`` and array literals of those.
Anything else raises ``LiteralEvaluationError`` so the caller can keep the raw
source text instead.
"""

import re

TOKEN_RE = re.compile(
    r"""
    \s*(?:
      (?P<number>(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+
                 |(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][+-]?\d+)?))
    | (?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
    | (?P<word>[A-Za-z_$][\w$]*)
    | (?P<punct>[\[\],+-])
    )""",
    re.VERBOSE,
)

ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
}

KEYWORD_VALUES: dict[str, object] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}


MAX_NESTING_DEPTH = 64


class LiteralEvaluationError(ValueError):
    """Raised when an expression is outside the literal grammar."""


def evaluate_literal(text: str) -> object:
    """Evaluate a literal expression and return the Python value."""
    tokens = _tokenize(text)
    value, pos = _parse_value(tokens, 0, 0)
    if pos != len(tokens):
        msg = f"Unexpected trailing input in {text!r}"
        raise LiteralEvaluationError(msg)
    return value


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    end = len(text.rstrip())
    while pos < end:
        m = TOKEN_RE.match(text, pos)
        if not m or m.end() == pos:
            msg = f"Unsupported syntax at offset {pos} in {text!r}"
            raise LiteralEvaluationError(msg)
        kind = m.lastgroup or ""
        tokens.append((kind, m.group(kind)))
        pos = m.end()
    return tokens


def _parse_value(tokens: list[tuple[str, str]], pos: int, depth: int) -> tuple[object, int]:
    if depth > MAX_NESTING_DEPTH:
        msg = f"Literal nested deeper than {MAX_NESTING_DEPTH} levels"
        raise LiteralEvaluationError(msg)
    if pos >= len(tokens):
        msg = "Unexpected end of expression"
        raise LiteralEvaluationError(msg)

    kind, text = tokens[pos]
    if kind == "number":
        return _parse_number(text), pos + 1
    if kind == "string":
        return _unescape(text[1:-1]), pos + 1
    if kind == "word":
        if text not in KEYWORD_VALUES:
            msg = f"Identifier {text!r} is not a literal"
            raise LiteralEvaluationError(msg)
        return KEYWORD_VALUES[text], pos + 1
    if text in "+-":
        operand, pos = _parse_value(tokens, pos + 1, depth + 1)
        if isinstance(operand, bool) or not isinstance(operand, (int, float)):
            msg = f"Unary {text} applies to numbers only"
            raise LiteralEvaluationError(msg)
        return (-operand if text == "-" else operand), pos
    if text == "[":
        return _parse_array(tokens, pos + 1, depth + 1)

    msg = f"Unexpected token {text!r}"
    raise LiteralEvaluationError(msg)


def _parse_array(
    tokens: list[tuple[str, str]], pos: int, depth: int
) -> tuple[list[object], int]:
    items: list[object] = []
    while True:
        if pos >= len(tokens):
            msg = "Unterminated array literal"
            raise LiteralEvaluationError(msg)
        if tokens[pos][1] == "]":
            return items, pos + 1
        item, pos = _parse_value(tokens, pos, depth)
        items.append(item)
        if pos < len(tokens) and tokens[pos][1] == ",":
            pos += 1
        elif pos >= len(tokens) or tokens[pos][1] != "]":
            msg = "Expected ',' or ']' in array literal"
            raise LiteralEvaluationError(msg)


def _parse_number(text: str) -> int | float:
    try:
        return _convert_number(text)
    except ValueError as e:
        # e.g. a bare prefix, or more digits than int() accepts
        msg = f"Invalid number literal {text[:32]!r}: {e}"
        raise LiteralEvaluationError(msg) from e


def _convert_number(text: str) -> int | float:
    text = text.replace("_", "")
    prefix = text[:2].lower()
    if prefix == "0x":
        return int(text[2:], 16)
    if prefix == "0o":
        return int(text[2:], 8)
    if prefix == "0b":
        return int(text[2:], 2)
    if any(c in text for c in ".eE"):
        value = float(text)
        return int(value) if value.is_integer() and "." not in text else value
    return int(text)


def _unescape(body: str) -> str:
    def repl(m: re.Match) -> str:
        esc = m.group(1)
        if esc.startswith("u{"):
            return chr(int(esc[2:-1], 16))
        if esc[0] in "ux" and len(esc) > 1:
            return chr(int(esc[1:], 16))
        return SIMPLE_ESCAPES.get(esc, esc)

    try:
        return ESCAPE_RE.sub(repl, body)
    except (ValueError, OverflowError) as e:
        msg = f"Invalid escape sequence in string literal: {e}"
        raise LiteralEvaluationError(msg) from e
