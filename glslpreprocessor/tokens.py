import re
import enum

LINE_ENDING = "\n"
BLANK = " \t"
TRAILING_BLANK = " \t\r\n"
IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class TokenType(enum.Enum):
    IDENTIFIER = enum.auto()
    NUMBER = enum.auto()
    WHITESPACE = enum.auto()
    SYMBOL = enum.auto()


class Token:
    __slots__ = ["value", "type"]

    def __init__(self, value, type_):
        self.value = value
        self.type = type_

    @property
    def whitespace(self):
        return self.type is TokenType.WHITESPACE

    def __repr__(self):
        return f"{self.type.name} {self.value!r}"  # pragma: no cover


def _make_cb(type_):
    def _cb(scanner, text):
        return Token(text, type_)
    return _cb


_scanner = re.Scanner([
    (r"[A-Za-z_][A-Za-z0-9_]*", _make_cb(TokenType.IDENTIFIER)),
    (r"[0-9][A-Za-z0-9_]*", _make_cb(TokenType.NUMBER)),
    (r"[ \t]+", _make_cb(TokenType.WHITESPACE)),
    (r"[^A-Za-z0-9_ \t]", _make_cb(TokenType.SYMBOL)),
])


def tokenize(text):
    """
    Split a line into identifier, number, blank and single-symbol tokens.

    Only identifier-shaped runs matter for macro lookup, so everything
    else stays opaque. Joining the token values gives back the input.
    """
    tokens, remainder = _scanner.scan(text)
    if remainder:
        raise SyntaxError(
            f"Unrecognized input: {remainder!r}"
        )  # pragma: no cover
    return tokens


def trim(line):
    return line.lstrip(BLANK).rstrip(TRAILING_BLANK)


def split_lines(source):
    """
    Yield (line_no, line) for every physical line, numbered from 1.

    A final line without a newline is still yielded; the empty string
    after a trailing newline is not.
    """
    lines = source.split(LINE_ENDING)
    if lines and lines[-1] == "":
        lines.pop()
    for line_no, line in enumerate(lines, 1):
        yield line_no, line


class CommentStripper:
    """
    Removes // and /* */ comments one line at a time.

    An unterminated block comment leaves in_block set, so the following
    lines are dropped until the closing marker turns up. openings counts
    the block comments started so far. Quotes open a string only outside
    comments and never span lines.
    """

    def __init__(self):
        self.in_block = False
        self.openings = 0

    def strip(self, line):
        out = []
        pos = 0
        length = len(line)
        quote = None
        while pos < length:
            if self.in_block:
                end = line.find("*/", pos)
                if end == -1:
                    return "".join(out)
                self.in_block = False
                pos = end + 2
                continue
            char = line[pos]
            if quote is not None:
                if char == quote and (pos == 0 or line[pos - 1] != "\\"):
                    quote = None
            elif char in "\"'":
                quote = char
            elif char == "/" and line.startswith("//", pos):
                break
            elif char == "/" and line.startswith("/*", pos):
                self.in_block = True
                self.openings += 1
                pos += 2
                continue
            out.append(char)
            pos += 1
        return "".join(out)
