"""Recursive-descent parser for the S-expression text format."""

from __future__ import annotations

import logging

from typedsexpr.errors import ParseError
from typedsexpr.nodes import SExpr
from typedsexpr.syntax import (
    COMMENT_CHAR,
    LIST_CLOSE,
    LIST_OPEN,
    NEWLINE,
    QUOTE,
    WHITESPACE,
    is_valid_token_char,
)

logger = logging.getLogger(__name__)

# A leading byte order mark is dropped.
_ENCODING = "utf-8-sig"


def skip_whitespace_and_comments(
    content: str,
    index: int,
    *,
    skip_newline: bool = False,
) -> int:
    """Advance past inline whitespace and ``;`` comments.

    Args:
        content: Text being parsed
        index: Position to start skipping from
        skip_newline: Also skip newlines (only done around the top-level
            expression; inside lists a newline is a line break node)

    Returns:
        Index of the first character that is not skipped

    """
    in_comment = False
    length = len(content)
    while index < length:
        c = content[index]
        if c == COMMENT_CHAR:
            in_comment = True
        elif c == NEWLINE:
            in_comment = False
        if in_comment or (skip_newline and c == NEWLINE) or c in WHITESPACE:
            index += 1
        else:
            break
    return index


class Parser:
    """Cursor over decoded text that reads one S-expression at a time."""

    def __init__(self, content: str) -> None:
        self.content = content
        self.index = 0

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.content, self.index)

    def at_end(self) -> bool:
        return self.index >= len(self.content)

    def skip(self, *, skip_newline: bool = False) -> None:
        self.index = skip_whitespace_and_comments(
            self.content,
            self.index,
            skip_newline=skip_newline,
        )

    def parse_document(self) -> SExpr:
        """Parse exactly one expression surrounded by optional whitespace."""
        self.skip(skip_newline=True)
        if self.at_end():
            msg = "Empty document: expected an expression"
            raise self.error(msg)
        root = self.parse_expression()
        self.skip(skip_newline=True)
        if not self.at_end():
            msg = f"Unexpected content after document: {self.content[self.index]!r}"
            raise self.error(msg)
        return root

    def parse_expression(self) -> SExpr:
        """Parse one expression, including any nested lists.

        Open lists are kept on an explicit stack, so nesting depth is not
        bounded by the interpreter's recursion limit.
        """
        open_lists: list[SExpr] = []
        while True:
            if self.at_end():
                if open_lists:
                    name = open_lists[-1].value
                    msg = f"Unexpected end of input: list '{name}' is not closed"
                else:
                    msg = "Unexpected end of input: expected an expression"
                raise self.error(msg)
            c = self.content[self.index]
            if open_lists and c == LIST_CLOSE:
                self.index += 1
                self.skip()
                node = open_lists.pop()
                if not open_lists:
                    return node
                continue
            if c == LIST_OPEN:
                self.index += 1
                node = SExpr.create_list(self.parse_token())
                if open_lists:
                    open_lists[-1].children.append(node)
                open_lists.append(node)
                continue
            node = self.parse_atom(c)
            if not open_lists:
                return node
            open_lists[-1].children.append(node)

    def parse_atom(self, c: str) -> SExpr:
        if c == NEWLINE:
            self.index += 1
            self.skip()
            return SExpr.create_line_break()
        if c == QUOTE:
            return SExpr.create_string(self.parse_string())
        return SExpr.create_token(self.parse_token())

    def parse_token(self) -> str:
        start = self.index
        length = len(self.content)
        while self.index < length and is_valid_token_char(self.content[self.index]):
            self.index += 1
        token = self.content[start : self.index]
        if not token:
            if self.at_end():
                msg = "Unexpected end of input: expected a token"
            else:
                msg = f"Invalid token character {self.content[self.index]!r}"
            raise self.error(msg)
        self.skip()
        return token

    def parse_string(self) -> str:
        start = self.index
        self.index += 1  # opening quote
        end = self.content.find(QUOTE, self.index)
        if end < 0:
            self.index = start
            msg = "Unexpected end of input: string is not closed"
            raise self.error(msg)
        text = self.content[self.index : end]
        self.index = end + 1
        self.skip()
        return text


def parse(content: bytes | str) -> SExpr:
    """Parse a document into its root node.

    Args:
        content: UTF-8 encoded bytes, or already decoded text

    Returns:
        The single top-level expression

    Raises:
        ParseError: If the input is not exactly one well-formed expression

    """
    if isinstance(content, bytes | bytearray):
        try:
            text = bytes(content).decode(_ENCODING)
        except UnicodeDecodeError as e:
            msg = f"Input is not valid UTF-8: {e.reason}"
            raise ParseError(msg, "", e.start) from e
    else:
        text = content
    root = Parser(text).parse_document()
    logger.debug(f"Parsed S-expression document: {len(text)} characters")
    return root
