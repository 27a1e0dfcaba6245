"""Sandbox escape patterns and their rewrites."""

import re

# Quote that may itself be escaped, as in a JSON-embedded source string.
_Q = r"""(\\?["'])"""

# Attribute rules apply inside markup tags only. Each entry:
# (pattern_regex, replacement, message)
ATTRIBUTE_RULES = [
    (
        re.compile(r"""\s+target\s*=\s*""" + _Q + r"""[^"'\\]*\1""", re.IGNORECASE),
        "",
        "target attribute could open a new browsing context",
    ),
    (
        re.compile(r"""\s+target\s*=\s*[^\s>"'\\{][^\s>"'\\]*""", re.IGNORECASE),
        "",
        "unquoted target attribute",
    ),
    (
        re.compile(r"""\bhref\s*=\s*""" + _Q + r"""\s*javascript:[^"'\\]*\1""", re.IGNORECASE),
        r"href=\1#\1",
        "javascript: link",
    ),
]

_NAV_OWNER = r"""(?<![\w$.])(?:(?:window|self|top|parent|document)\.)*"""

# A bare `location` may be a local binding; only an owned location or
# `location.href` navigates on assignment.
_NAV_ASSIGN = (
    r"""(?<![\w$.])(?:(?:window|self|top|parent|document)\.)+location(?:\.href)?"""
    r"""|(?<![\w$.])location\.href"""
)

# Script rules apply to the whole document. Replacements comment out the
# rest of the statement.
SCRIPT_RULES = [
    (
        re.compile(r"""(?:""" + _NAV_ASSIGN + r""")\s*=(?!=)"""),
        "// blocked: ",
        "top-level navigation assignment",
    ),
    (
        re.compile(_NAV_OWNER + r"""location\.(?:assign|replace)\s*\("""),
        "// blocked: (",
        "top-level navigation call",
    ),
    (
        re.compile(r"""(?<![\w$.])window\.open\s*\("""),
        "// blocked: (",
        "window.open call",
    ),
]

TAG_RE = re.compile(r"<[a-zA-Z][^<>]*>")
