"""Static multi-file project around a generated entry file.

Only the entry file comes from the pipeline; everything else is a fixed
template per stack.
"""

import re

from config.stacks import STACKS
from core.state import GeneratedFile
from utils.folder_naming import slugify
from utils.template_engine import list_templates, render_template

_UNSAFE_TITLE_RE = re.compile(r"[^\w .-]")

_LANGUAGES = {
    ".json": "json",
    ".html": "html",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".css": "css",
    ".vue": "vue",
    ".svelte": "svelte",
}


def _language(path):
    for suffix, language in _LANGUAGES.items():
        if path.endswith(suffix):
            return language
    return "text"


def project_files(stack, code, title="Generated App"):
    """Entry file plus the stack's static project files.

    The html stack is a single document and has no scaffold.
    """
    entry = STACKS[stack]["entry_file"]
    files = [GeneratedFile(path=entry, content=code, language=STACKS[stack]["language"])]
    if stack == "html":
        return files

    title = _UNSAFE_TITLE_RE.sub("", title).strip() or "Generated App"
    variables = {"name": slugify(title).replace("_", "-") or "generated-app", "title": title}
    for template in list_templates(f"project/{stack}"):
        path = template[:-len(".tpl")]
        if path == entry:
            continue
        content = render_template(f"project/{stack}", template, variables)
        files.append(GeneratedFile(path=path, content=content, language=_language(path)))
    return files
