"""Pure text helpers for recognizing the shape of generated source.

Shared by the synthesizers (normalization) and the preview compiler
(transformation). Nothing here parses code; every helper is a regex or a
line-oriented rewrite.
"""

import json
import re

_FENCE_RE = re.compile(r"^```[\w.+#-]*[ \t]*\n?(.*?)\n?```\s*$", re.DOTALL | re.IGNORECASE)

_LEADING_COMMENT_RE = re.compile(r"\A(?:\s*(?://[^\n]*(?:\n|\Z)|/\*.*?\*/|<!--.*?-->))+\s*", re.DOTALL)

_USE_CLIENT_RE = re.compile(r"""^\s*["']use client["'];?[ \t]*\n?""", re.MULTILINE)

_IMPORT_PATTERNS = [
    # import { a,\n b } from "x";
    re.compile(r"^[ \t]*import\s+(?:type\s+)?\{[^}]*\}\s*from\s*['\"][^'\"]*['\"];?[ \t]*$\n?", re.MULTILINE),
    # import X from "x";  import * as X from "x";  import X, { y } from "x";
    re.compile(r"^[ \t]*import\s+[^'\"\n;]*?\s+from\s+['\"][^'\"]*['\"];?[ \t]*$\n?", re.MULTILINE),
    # import "./styles.css";
    re.compile(r"^[ \t]*import\s+['\"][^'\"]*['\"];?[ \t]*$\n?", re.MULTILINE),
]

_EXPORT_DEFAULT_DECL_RE = re.compile(
    r"\bexport\s+default\s+(async\s+)?(function\*?|class)(?=\s+(?!extends\b)[A-Za-z_])"
)
_EXPORT_DEFAULT_RE = re.compile(r"^([ \t]*)export\s+default\s+", re.MULTILINE)
_EXPORT_NAMED_RE = re.compile(r"^([ \t]*)export\s+(?=(?:async\s+)?(?:function|const|let|var|class)\b)", re.MULTILINE)
_EXPORT_LIST_RE = re.compile(r"^[ \t]*export\s*\{[^}]*\}\s*;?[ \t]*$\n?", re.MULTILINE)
_DEFAULT_EXPORT_DECL_NAME_RE = re.compile(
    r"\bexport\s+default\s+(?:async\s+)?(?:function\*?|class)\s+(?!extends\b)([A-Za-z_]\w*)"
)
_DEFAULT_EXPORT_IDENT_RE = re.compile(
    r"^[ \t]*export\s+default\s+(?!(?:function|class|async)\b)([A-Za-z_]\w*)\s*;?[ \t]*$\n?", re.MULTILINE
)
ANONYMOUS_DEFAULT = "__DefaultExport"

_ENTRY_NAME_RE = re.compile(
    r"(?:\bfunction\s+([A-Z]\w*)\s*\("
    r"|\b(?:const|let|var)\s+([A-Z]\w*)\s*(?::\s*[\w.<>, \[\]]+)?\s*=\s*"
    r"(?:\([^)]*\)|\w+\s*=>|async\b|function\b|React\.|memo\b|forwardRef\b)"
    r"|\bclass\s+([A-Z]\w*)\s+extends\b)"
)

_TOP_LEVEL_BINDING_RE = re.compile(
    r"^(?:export\s+)?(?:(let|var)|const|(?:async\s+)?function\*?|class)\s+([A-Za-z_]\w*)",
    re.MULTILINE,
)

_STYLE_BLOCK_RE = re.compile(r"<style\b[^>]*>.*?</style>", re.DOTALL | re.IGNORECASE)

DEFAULT_ENTRY_NAME = "App"


def strip_code_fences(text):
    """Remove one surrounding ```lang ... ``` block, if present."""
    if not text:
        return ""
    cleaned = text.strip()

    match = _FENCE_RE.match(cleaned)
    if match:
        return match.group(1).strip()

    # Truncated reply: opening fence without a closing one
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines.pop(0)
        if lines and lines[-1].strip() == "```":
            lines.pop()
        return "\n".join(lines).strip()

    return cleaned


def extract_json(text):
    """Return the first JSON object found in text, or None."""
    if not text:
        return None
    cleaned = strip_code_fences(text)
    try:
        value = json.loads(cleaned)
        return value if isinstance(value, dict) else None
    except json.JSONDecodeError:
        pass
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        value = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def strip_leading_comment(code):
    """Drop comment lines that precede the code, e.g. a file-path header."""
    return _LEADING_COMMENT_RE.sub("", code, count=1)


def strip_use_client(code):
    return _USE_CLIENT_RE.sub("", code)


def strip_imports(code):
    for pattern in _IMPORT_PATTERNS:
        code = pattern.sub("", code)
    return code


def has_default_export(code):
    return bool(re.search(r"\bexport\s+default\b", code))


def default_export_name(code):
    """Name bound by the default export.

    None when there is no default export; ANONYMOUS_DEFAULT when the export
    is an expression (``export default memo(App)``, ``export default {...}``).
    """
    match = _DEFAULT_EXPORT_DECL_NAME_RE.search(code)
    if match:
        return match.group(1)
    match = _DEFAULT_EXPORT_IDENT_RE.search(code)
    if match:
        return match.group(1)
    if has_default_export(code):
        return ANONYMOUS_DEFAULT
    return None


def strip_exports(code):
    """Turn module exports into plain declarations.

    ``export default function App`` becomes ``function App``; a trailing
    ``export default App;`` is dropped since the declaration already exists;
    any other default export is bound to ANONYMOUS_DEFAULT.
    """
    code = _EXPORT_LIST_RE.sub("", code)
    code = _DEFAULT_EXPORT_IDENT_RE.sub("", code)
    code = _EXPORT_DEFAULT_DECL_RE.sub(lambda m: (m.group(1) or "") + m.group(2), code)
    code = _EXPORT_DEFAULT_RE.sub(r"\1const %s = " % ANONYMOUS_DEFAULT, code)
    code = _EXPORT_NAMED_RE.sub(r"\1", code)
    return code


def find_entry_name(code, default=DEFAULT_ENTRY_NAME):
    """Name of the component to mount.

    Prefers the default export, then the first uppercase-leading function,
    component-like constant or class declaration.
    """
    name = default_export_name(code)
    if name:
        return name
    match = _ENTRY_NAME_RE.search(code)
    if match:
        return next(g for g in match.groups() if g)
    return default


def top_level_bindings(code):
    """Names declared at column zero, split into (mutable, all)."""
    mutable, names = [], []
    for match in _TOP_LEVEL_BINDING_RE.finditer(code):
        name = match.group(2)
        if name in names:
            continue
        names.append(name)
        if match.group(1):
            mutable.append(name)
    return mutable, names


def extract_block(source, tag):
    """First <tag ...>...</tag> block as (attributes, body), or None."""
    pattern = re.compile(r"<%s(\s[^>]*)?>(.*?)</%s>" % (tag, tag), re.DOTALL | re.IGNORECASE)
    match = pattern.search(source)
    if not match:
        return None
    return (match.group(1) or "").strip(), match.group(2)


def remove_block(source, tag):
    pattern = re.compile(r"<%s(\s[^>]*)?>.*?</%s>" % (tag, tag), re.DOTALL | re.IGNORECASE)
    return pattern.sub("", source, count=1)


def strip_style_blocks(source):
    return _STYLE_BLOCK_RE.sub("", source)


def has_doctype(text):
    return "<!doctype" in text.lower()


_SCRIPT_CLOSE_RE = re.compile(r"</(script)", re.IGNORECASE)


def script_safe(text):
    """Escape text for embedding inside an inline <script> element.

    Only a closing script tag or a comment opener can end the element early;
    everything else, JSX closing tags included, is left alone.
    """
    return _SCRIPT_CLOSE_RE.sub(r"<\\/\1", text).replace("<!--", "<\\!--")


_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_HEAD_OPEN_RE = re.compile(r"<head\b[^>]*>", re.IGNORECASE)
_BODY_CLOSE_RE = re.compile(r"</body\s*>", re.IGNORECASE)


def inject_head(document, snippet):
    """Insert snippet at the end of <head>, or right after <head>, or at the top."""
    match = _HEAD_CLOSE_RE.search(document)
    if match:
        return document[:match.start()] + snippet + "\n" + document[match.start():]
    match = _HEAD_OPEN_RE.search(document)
    if match:
        return document[:match.end()] + "\n" + snippet + document[match.end():]
    return snippet + "\n" + document


def inject_body_end(document, snippet):
    """Insert snippet before the last </body>, or append it."""
    matches = list(_BODY_CLOSE_RE.finditer(document))
    if matches:
        at = matches[-1].start()
        return document[:at] + snippet + "\n" + document[at:]
    return document + "\n" + snippet


def cut_before_doctype(text):
    """Drop any prose the model put before the document root."""
    lower = text.lower()
    for marker in ("<!doctype", "<html"):
        at = lower.find(marker)
        if at > 0:
            return text[at:]
        if at == 0:
            return text
    return text


TAILWIND_TAG = '<script src="https://cdn.tailwindcss.com"></script>'


def ensure_tailwind(document):
    if "cdn.tailwindcss.com" in document:
        return document
    return inject_head(document, TAILWIND_TAG)
