"""
Recursive-descent parser for Lua table literals and JavaScript object literals.

Turns pasted item definitions into plain Python values without ever
executing the text. Two dialects share one grammar:

    table   Lua style: `{ ['key'] = v, key = v, 'positional' }`,
            `[[long strings]]`, `nil`
    object  JavaScript style: `{ key: v, "key": v }`, `[arrays]`,
            `null` / `undefined`

Both dialects accept either key syntax, `,` or `;` separators, missing
separators between fields and a trailing separator before the closing
brace. A table holding only positional values becomes a list; a table
mixing positional and keyed values keeps positional entries under Lua's
1-based string keys ("1", "2", ...).
"""

import re
from typing import Any

from exceptions import LiteralParseError

TABLE = "table"
OBJECT = "object"

IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
NUMBER = re.compile(
    r"[+-]?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)
LONG_BRACKET_OPEN = re.compile(r"\[(=*)\[")

KEYWORDS = {
    "true": True,
    "false": False,
    "nil": None,
    "null": None,
    "undefined": None,
}

SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "a": "\a",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "\n": "",
}

_MISSING = object()


class LiteralParser:
    """
    Single-use parser over one text.

    Usage:
        value = LiteralParser(text, dialect=TABLE).parse()
    """

    def __init__(self, text: str, dialect: str = TABLE):
        if dialect not in (TABLE, OBJECT):
            raise ValueError(f"Unknown dialect: {dialect}")
        self.text = text
        self.dialect = dialect
        self.pos = 0

    # ===================
    # ENTRY POINT
    # ===================

    def parse(self) -> Any:
        """
        Parse the whole text as one value.

        Returns:
            dict, list, str, int, float, bool or None

        Raises:
            LiteralParseError: On any syntax error or trailing content
        """
        self._skip_ws()
        value = self._parse_value()
        self._skip_ws()
        if self._peek() == ";":
            self.pos += 1
            self._skip_ws()
        if self.pos < len(self.text):
            self._error("Unexpected trailing content")
        return value

    # ===================
    # LOW-LEVEL HELPERS
    # ===================

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _error(self, message: str):
        line = self.text.count("\n", 0, self.pos) + 1
        column = self.pos - self.text.rfind("\n", 0, self.pos)
        raise LiteralParseError(message, line, column)

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            found = self._peek() or "end of input"
            self._error(f"Expected '{char}' but found '{found}'")
        self.pos += 1

    def _skip_ws(self) -> None:
        """Skip whitespace and comments of either dialect."""
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char.isspace():
                self.pos += 1
            elif text.startswith("--", self.pos):
                block = LONG_BRACKET_OPEN.match(text, self.pos + 2)
                if block:
                    close = "]" + block.group(1) + "]"
                    end = text.find(close, block.end())
                    self.pos = len(text) if end == -1 else end + len(close)
                else:
                    end = text.find("\n", self.pos)
                    self.pos = len(text) if end == -1 else end
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                self.pos = len(text) if end == -1 else end + 2
            else:
                break

    def _at_assignment(self) -> bool:
        """True if the cursor sits on `=` (not `==`) or `:`."""
        char = self._peek()
        if char == ":":
            return True
        return char == "=" and self._peek(1) != "="

    # ===================
    # VALUES
    # ===================

    def _parse_value(self) -> Any:
        char = self._peek()

        if char == "{":
            return self._parse_table()
        if char == "[":
            if LONG_BRACKET_OPEN.match(self.text, self.pos) and self.dialect == TABLE:
                return self._parse_long_string()
            if self.dialect == OBJECT:
                return self._parse_array()
            self._error("Unexpected '['")
        if char in ("'", '"'):
            return self._parse_string()
        if NUMBER.match(self.text, self.pos):
            return self._parse_number()

        match = IDENTIFIER.match(self.text, self.pos)
        if match:
            word = match.group(0)
            if word in KEYWORDS:
                self.pos = match.end()
                return KEYWORDS[word]
            self._error(f"Unexpected identifier '{word}'")

        if not char:
            self._error("Unexpected end of input")
        self._error(f"Unexpected character '{char}'")

    def _parse_number(self) -> Any:
        match = NUMBER.match(self.text, self.pos)
        literal = match.group(0)
        self.pos = match.end()

        body = literal.lstrip("+-")
        if body[:2].lower() == "0x":
            value = int(body, 16)
            return -value if literal.startswith("-") else value
        if "." in literal or "e" in literal.lower():
            return float(literal)
        return int(literal)

    def _parse_string(self) -> str:
        quote = self._peek()
        self.pos += 1
        chunks = []
        text = self.text

        while True:
            if self.pos >= len(text):
                self._error("Unterminated string")
            char = text[self.pos]

            if char == quote:
                self.pos += 1
                return "".join(chunks)
            if char == "\n":
                self._error("Unterminated string")
            if char == "\\":
                chunks.append(self._parse_escape())
                continue

            chunks.append(char)
            self.pos += 1

    def _parse_escape(self) -> str:
        # cursor on the backslash
        self.pos += 1
        text = self.text
        char = self._peek()

        if not char:
            self._error("Unterminated string")

        if char == "x":
            digits = text[self.pos + 1:self.pos + 3]
            if re.fullmatch(r"[0-9a-fA-F]{2}", digits):
                self.pos += 3
                return chr(int(digits, 16))
        elif char == "u":
            braced = re.match(r"u\{([0-9a-fA-F]+)\}", text[self.pos:])
            if braced:
                self.pos += braced.end()
                return chr(int(braced.group(1), 16))
            digits = text[self.pos + 1:self.pos + 5]
            if re.fullmatch(r"[0-9a-fA-F]{4}", digits):
                self.pos += 5
                return chr(int(digits, 16))
        elif char.isdigit():
            decimal = re.match(r"\d{1,3}", text[self.pos:])
            self.pos += decimal.end()
            return chr(int(decimal.group(0)))

        self.pos += 1
        # unknown escapes keep the character itself
        return SIMPLE_ESCAPES.get(char, char)

    def _parse_long_string(self) -> str:
        match = LONG_BRACKET_OPEN.match(self.text, self.pos)
        close = "]" + match.group(1) + "]"
        end = self.text.find(close, match.end())
        if end == -1:
            self._error("Unterminated long string")

        content = self.text[match.end():end]
        self.pos = end + len(close)
        # Lua drops a newline right after the opening bracket
        if content.startswith("\r\n"):
            return content[2:]
        if content.startswith("\n"):
            return content[1:]
        return content

    def _parse_array(self) -> list:
        self._expect("[")
        values = []

        while True:
            self._skip_ws()
            if self._peek() == "]":
                self.pos += 1
                return values

            values.append(self._parse_value())
            self._skip_ws()

            if self._peek() == ",":
                self.pos += 1
            elif self._peek() != "]":
                self._error("Expected ',' or ']' in array")

    # ===================
    # TABLES
    # ===================

    def _parse_table(self) -> Any:
        self._expect("{")
        keyed: dict[str, Any] = {}
        positional: list[Any] = []

        while True:
            self._skip_ws()
            char = self._peek()
            if char == "}":
                self.pos += 1
                break
            if not char:
                self._error("Unterminated table, expected '}'")

            key, value = self._parse_field()
            if key is _MISSING:
                positional.append(value)
                if keyed:
                    keyed[str(len(positional))] = value
            else:
                if not keyed and positional:
                    # switching from list-like to map-like: keep earlier entries
                    for index, earlier in enumerate(positional, start=1):
                        keyed[str(index)] = earlier
                keyed[key] = value

            self._skip_ws()
            if self._peek() in (",", ";"):
                self.pos += 1

        if keyed:
            return keyed
        if positional:
            return positional
        return {}

    def _parse_field(self) -> tuple[Any, Any]:
        """
        Parse one table field.

        Returns:
            (key, value), with key set to _MISSING for positional values
        """
        char = self._peek()

        if char == "[" and not LONG_BRACKET_OPEN.match(self.text, self.pos):
            return self._parse_bracket_field()

        match = IDENTIFIER.match(self.text, self.pos)
        if match:
            start = self.pos
            self.pos = match.end()
            self._skip_ws()
            if self._at_assignment():
                self.pos += 1
                self._skip_ws()
                return match.group(0), self._parse_value()
            self.pos = start
            return _MISSING, self._parse_value()

        value = self._parse_value()
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            self._skip_ws()
            if self._at_assignment():
                self.pos += 1
                self._skip_ws()
                return _key_to_str(value), self._parse_value()
        return _MISSING, value

    def _parse_bracket_field(self) -> tuple[str, Any]:
        self._expect("[")
        self._skip_ws()

        match = IDENTIFIER.match(self.text, self.pos)
        if match and match.group(0) not in KEYWORDS:
            key: Any = match.group(0)
            self.pos = match.end()
        else:
            key = self._parse_value()
            if key is None or isinstance(key, (dict, list)):
                self._error("Invalid table key")

        self._skip_ws()
        self._expect("]")
        self._skip_ws()
        if not self._at_assignment():
            self._error("Expected '=' after table key")
        self.pos += 1
        self._skip_ws()
        return _key_to_str(key), self._parse_value()


def _key_to_str(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    return str(key)


def parse_table_literal(text: str) -> Any:
    """Parse Lua table literal text. Raises LiteralParseError."""
    return LiteralParser(text, dialect=TABLE).parse()


def parse_object_literal(text: str) -> Any:
    """Parse JavaScript object/array literal text. Raises LiteralParseError."""
    return LiteralParser(text, dialect=OBJECT).parse()
