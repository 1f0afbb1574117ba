"""
Comment stripping for pasted item definitions.

Removes Lua (`--[[ ]]`, `--`) and JavaScript (`/* */`, `//`) comments
before any parse attempt. This is a textual pass, not a lexer: a comment
marker inside a quoted string is stripped too.
"""

import re

LUA_BLOCK_COMMENT = re.compile(r"--\[\[.*?\]\]", re.DOTALL)
LUA_LINE_COMMENT = re.compile(r"--.*$", re.MULTILINE)
JS_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
# "://" is left alone so image URLs survive
JS_LINE_COMMENT = re.compile(r"(?<!:)//.*$", re.MULTILINE)


def normalize(raw: str) -> str:
    """
    Strip comments in both dialects and trim the result.

    Args:
        raw: Text as pasted by the operator

    Returns:
        Text without comments, stripped of surrounding whitespace
    """
    text = LUA_BLOCK_COMMENT.sub("", raw)
    text = LUA_LINE_COMMENT.sub("", text)
    text = JS_BLOCK_COMMENT.sub("", text)
    text = JS_LINE_COMMENT.sub("", text)
    return text.strip()
