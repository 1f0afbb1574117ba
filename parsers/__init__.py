"""
Parsers for pasted item definitions.

normalize → try_parse turns operator-pasted text (JSON, JavaScript object
or Lua table) into plain Python values.
"""

from parsers.text_normalizer import normalize
from parsers.literal_parser import (
    LiteralParser,
    parse_table_literal,
    parse_object_literal,
)
from parsers.multi_format_parser import (
    try_parse,
    parse_lua_table,
    parse_javascript,
    ACCEPTED_FORMATS,
)

__all__ = [
    "normalize",
    "LiteralParser",
    "parse_table_literal",
    "parse_object_literal",
    "try_parse",
    "parse_lua_table",
    "parse_javascript",
    "ACCEPTED_FORMATS",
]
