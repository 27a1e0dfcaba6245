"""Preview compiler: any stack's source -> one self-contained HTML document.

``compile_preview`` never raises. Whatever goes wrong, the caller gets a
document it can assign to a sandboxed frame.
"""

import html
import json
import logging
import re
import textwrap

from core.sandbox import isolate
from utils.code_shapes import (
    ANONYMOUS_DEFAULT,
    cut_before_doctype,
    default_export_name,
    ensure_tailwind,
    extract_block,
    find_entry_name,
    has_default_export,
    has_doctype,
    inject_body_end,
    remove_block,
    script_safe,
    strip_exports,
    strip_imports,
    strip_style_blocks,
    strip_use_client,
    top_level_bindings,
)
from utils.template_engine import load_template, render_template

logger = logging.getLogger(__name__)

_REACTIVE_RE = re.compile(r"^[ \t]*\$:[ \t]*(.+?)[ \t]*;?[ \t]*$\n?", re.MULTILINE)


def _js(value):
    """A JSON literal that is safe inside an inline <script>."""
    return script_safe(json.dumps(value))


def placeholder(heading="Nothing to preview", message="Generate or paste some code to see it here."):
    return render_template("preview", "placeholder.html.tpl", {
        "heading": html.escape(heading),
        "message": html.escape(message),
    })


def _ensure_rooted(document):
    if document.lstrip().lower().startswith("<!doctype"):
        return document.lstrip()
    return "<!DOCTYPE html>\n" + document


def compile_html(source):
    document = cut_before_doctype(source.strip())
    if not has_doctype(document) and "<html" not in document.lower():
        document = render_template("preview", "html_shell.html.tpl", {"title": "Preview", "body": document})
    document = ensure_tailwind(_ensure_rooted(document))
    if 'id="page-' in document and "function showPage" not in document:
        document = inject_body_end(document, load_template("preview", "show_page.js.tpl").rstrip())
    return document


def compile_react(source):
    code = strip_imports(strip_use_client(source))
    entry = default_export_name(code) or find_entry_name(code)
    code = strip_exports(code).strip()
    if entry != ANONYMOUS_DEFAULT and not re.search(r"\b%s\b" % re.escape(entry), code):
        return placeholder(message=f"No component named {entry} was found.")
    return render_template("preview", "react_harness.html.tpl", {
        "source": _js(code),
        "entry": entry,
    })


def compile_vue(source):
    template = extract_block(source, "template")
    script = extract_block(source, "script")
    if template is None:
        markup = strip_style_blocks(remove_block(source, "script")).strip()
        if not markup or script is None:
            return placeholder(message="No <template> block was found.")
    else:
        markup = template[1].strip()

    attrs, body = script if script else ("", "")
    body = strip_imports(textwrap.dedent(body))
    uses_options = "setup" not in attrs.split() and has_default_export(body)
    body = strip_exports(body)
    _, names = top_level_bindings(body)
    return render_template("preview", "vue_harness.html.tpl", {
        "script": _js(body),
        "template": _js(markup),
        "bindings": _js(names),
        "uses_options": "true" if uses_options else "false",
    })


def compile_svelte(source):
    script = extract_block(source, "script")
    body = textwrap.dedent(script[1]) if script else ""
    markup = strip_style_blocks(remove_block(source, "script") if script else source).strip()
    if not markup:
        return placeholder(message="The component has no markup.")

    reactive = [m.group(1) for m in _REACTIVE_RE.finditer(body)]
    body = strip_exports(strip_imports(_REACTIVE_RE.sub("", body)))
    mutable, names = top_level_bindings(body)
    return render_template("preview", "svelte_harness.html.tpl", {
        "script": _js(body),
        "reactive": _js(reactive),
        "names": _js(names),
        "mutable": _js(mutable),
        "markup": _js(markup),
    })


COMPILERS = {
    "html": compile_html,
    "react": compile_react,
    "nextjs": compile_react,
    "vue": compile_vue,
    "svelte": compile_svelte,
}


def compile_preview(source, stack):
    """Compile source for one stack into a renderable document."""
    if not source or not source.strip():
        return placeholder()
    compiler = COMPILERS.get(stack)
    if compiler is None:
        return placeholder(message=f"Preview is not available for {stack}.")
    try:
        return _ensure_rooted(compiler(source))
    except Exception:
        logger.exception("Preview compilation failed for %s", stack)
        return placeholder("Preview unavailable", "The preview could not be built. Check the Code tab.")


def preview_document(source, stack, pages=()):
    """compile_preview plus sandbox isolation. Always returns a document."""
    document = compile_preview(source, stack)
    try:
        return isolate(document, pages)
    except Exception:
        logger.exception("Sandbox isolation failed for %s", stack)
        return placeholder("Preview unavailable", "The preview could not be built. Check the Code tab.")
