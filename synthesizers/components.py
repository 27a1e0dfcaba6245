"""React and Next.js component synthesizers."""

import re

from synthesizers.base import Synthesizer
from utils.code_shapes import (
    DEFAULT_ENTRY_NAME,
    find_entry_name,
    has_default_export,
    strip_leading_comment,
    strip_use_client,
)

_CLIENT_ONLY_RE = re.compile(
    r"\buse(?:State|Effect|Reducer|Ref|Callback|Memo|Context|LayoutEffect)\b|\bon[A-Z]\w*=\{"
)

_SHELL = """export default function {name}() {{
  return (
    <>
{body}
    </>
  );
}}
"""


def _indent(text, prefix="      "):
    return "\n".join(prefix + line if line.strip() else line for line in text.splitlines())


class ReactSynthesizer(Synthesizer):
    stack = "react"
    description = "React function component in TypeScript"

    def normalize(self, text):
        code = strip_leading_comment(text).strip()
        if has_default_export(code):
            return code + "\n"

        name = find_entry_name(code, default=None)
        if name:
            return f"{code}\n\nexport default {name};\n"
        # Bare JSX with no component around it
        return _SHELL.format(name=DEFAULT_ENTRY_NAME, body=_indent(code))


class NextSynthesizer(ReactSynthesizer):
    stack = "nextjs"
    description = "Next.js App Router page in TypeScript"

    def normalize(self, text):
        code = strip_use_client(super().normalize(text))
        if _CLIENT_ONLY_RE.search(code):
            code = '"use client";\n\n' + code.lstrip()
        return code
