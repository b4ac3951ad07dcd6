"""Abstract syntax tree and recursive-descent parser for yalisp expressions.

Formally, the grammar accepted by Parser can be defined as

```
<expr>    ::= <ws>* (<list> | <integer> | <string> | <symbol>)
<list>    ::= "(" <expr>* <ws>* ")"
<integer> ::= <digit>+                  ; no sign, decimal only
<string>  ::= '"' [^"]* '"'             ; no escape sequences, so a string can never contain '"'
<symbol>  ::= [^ \\t\\n)]+                ; anything else, including '(' after the first character
<ws>      ::= " " | "\\t" | "\\n"
```

There is no keyword table: '+', '-' and 'concat' are plain symbols and only become operators during evaluation. The
symbol scanner works on character classes, so '(+1 2)' reads '+1' as a single symbol rather than '+' applied to 1.
"""

import logging
from dataclasses import dataclass, field

from yalisp.lang.error import (
    UnexpectedCloseParen,
    UnexpectedEndOfInput,
    UnmatchedOpenParen,
    UnterminatedString,
)


logger = logging.getLogger(__name__)


class Node:
    """Superclass of every AST node. Nodes are immutable and are owned by their parent List (or by the caller, for the
    root). Each node remembers the span of source text it was parsed from; spans do not take part in equality.
    """

    def walk(self):
        """Yields self and every descendant, depth first."""
        yield self


@dataclass(frozen=True)
class IntLiteral(Node):
    value: int
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Symbol(Node):
    name: str
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class StringLiteral(Node):
    text: str
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    def __str__(self):
        return f'"{self.text}"'


@dataclass(frozen=True)
class List(Node):
    items: tuple = ()
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    def walk(self):
        yield self
        for item in self.items:
            yield from item.walk()

    def __str__(self):
        return "(" + " ".join(str(item) for item in self.items) + ")"


class Parser:
    """Parses expressions out of text. pos is the cursor: each call to parse consumes exactly one expression and leaves
    pos just after it, or at the point of failure if a ParseError is raised.
    """
    WHITESPACE = " \t\n"
    DIGITS = "0123456789"
    SYMBOL_END = " \t\n)"

    def __init__(self, text, pos=0):
        self.text = text
        self.pos = pos

    def peek(self):
        """Returns the character under the cursor, or "" at end of input."""
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos] in Parser.WHITESPACE:
            self.pos += 1

    def at_end(self):
        """Whether only whitespace remains. Advances the cursor past that whitespace."""
        self.skip_whitespace()
        return self.pos >= len(self.text)

    def parse(self):
        """Parses one expression starting at self.pos."""
        self.skip_whitespace()
        char = self.peek()

        if char == "(":
            return self._parse_list()
        elif char and char in Parser.DIGITS:
            return self._parse_integer()
        elif char == '"':
            return self._parse_string()
        elif char == ")":
            raise UnexpectedCloseParen(start=self.pos, end=self.pos + 1)
        elif char:
            return self._parse_symbol()

        raise UnexpectedEndOfInput(start=self.pos, end=self.pos + 1)

    def _parse_list(self):
        start = self.pos
        self.pos += 1

        items = []
        while True:
            self.skip_whitespace()
            char = self.peek()
            if char == ")":
                break
            if not char:
                raise UnmatchedOpenParen(start=start, end=start + 1)
            items.append(self.parse())  # a failing child propagates and items is dropped with this frame

        self.pos += 1
        return List(tuple(items), (start, self.pos))

    def _parse_integer(self):
        start = self.pos
        value = 0
        while self.peek() and self.peek() in Parser.DIGITS:
            value = value * 10 + int(self.text[self.pos])
            self.pos += 1
        return IntLiteral(value, (start, self.pos))

    def _parse_string(self):
        start = self.pos
        self.pos += 1

        end = self.text.find('"', self.pos)
        if end == -1:
            self.pos = len(self.text)
            raise UnterminatedString(start=start, end=self.pos)

        text = self.text[self.pos:end]
        self.pos = end + 1
        return StringLiteral(text, (start, self.pos))

    def _parse_symbol(self):
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in Parser.SYMBOL_END:
            self.pos += 1
        return Symbol(self.text[start:self.pos], (start, self.pos))


def parse(text, pos=0):
    """Parses the first expression of text (starting at pos). Anything after it is left unread."""
    parser = Parser(text, pos)
    node = parser.parse()
    logger.debug("parsed %s", node)

    if not parser.at_end():
        logger.debug("ignoring trailing input %r", text[parser.pos:])
    return node


def parse_many(text):
    """Parses every top-level expression in text, in order."""
    parser = Parser(text)
    nodes = []
    while not parser.at_end():
        nodes.append(parser.parse())
    logger.debug("parsed %d expressions", len(nodes))
    return nodes
