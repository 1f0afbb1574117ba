"""
Multi-format parser for pasted item definitions.

Tries each accepted format in turn and returns the first structured
result:

    1. JSON
    2. Lua table literal (optionally prefixed by `return`)
    3. JavaScript object/array literal (optionally prefixed by
       `export default`, `module.exports =`, `exports =` or `return`)

Every attempt is independent; a failure only moves on to the next one.
"""

import json
import re
from typing import Any, Optional
import structlog

from exceptions import LiteralParseError
from parsers.literal_parser import parse_table_literal, parse_object_literal

logger = structlog.get_logger(__name__)

ACCEPTED_FORMATS = ("JSON", "JavaScript object", "Lua table")

RETURN_PREFIX = re.compile(r"^return\s+")
JS_PREFIXES = (
    re.compile(r"^export\s+default\s+"),
    re.compile(r"^module\.exports\s*=\s*"),
    re.compile(r"^exports\s*=\s*"),
    re.compile(r"^return\s+"),
)


def try_parse(text: str) -> Optional[Any]:
    """
    Parse text with the first format that accepts it.

    Args:
        text: Normalized (comment-free) content

    Returns:
        Parsed value, or None if no format accepted the text
    """
    logger.debug("parse_attempt_started", preview=text[:200])

    try:
        value = json.loads(text)
        logger.debug("parsed_as_json")
        return value
    except (ValueError, RecursionError) as e:
        logger.debug("json_parse_failed", error=str(e))

    try:
        value = parse_lua_table(text)
        logger.debug("parsed_as_lua_table")
        return value
    except (LiteralParseError, RecursionError) as e:
        logger.debug("lua_table_parse_failed", error=str(e))

    try:
        value = parse_javascript(text)
        logger.debug("parsed_as_javascript")
        return value
    except (LiteralParseError, RecursionError) as e:
        logger.debug("javascript_parse_failed", error=str(e))

    logger.debug("no_format_matched")
    return None


def parse_lua_table(text: str) -> Any:
    """
    Parse a Lua table, with or without `return` and outer braces.

    `return { ... }` and `{ ... }` parse directly; bare field lists such as
    `bandage = { label = 'Bandage' }` are parsed as if wrapped in braces.

    Raises:
        LiteralParseError: If neither form parses
    """
    content = RETURN_PREFIX.sub("", text.strip(), count=1).strip()

    if content.startswith("{"):
        try:
            return parse_table_literal(content)
        except LiteralParseError:
            # "{...}, other = {...}" still parses as a field list
            pass

    return parse_table_literal("{" + content + "}")


def parse_javascript(text: str) -> Any:
    """
    Parse a JavaScript object or array literal.

    Raises:
        LiteralParseError: If the literal does not parse
    """
    content = text.strip()
    for prefix in JS_PREFIXES:
        content = prefix.sub("", content, count=1)
    content = content.strip()

    if not content.startswith(("{", "[")):
        content = "{" + content + "}"

    return parse_object_literal(content)
