"""Sandbox isolation for renderable documents.

``sanitize`` removes the ways a document could navigate its host;
``inject_router`` adds the in-page router that turns clicks into page
switches or mock interactions. Both are idempotent.
"""

import json

from config.defaults import DEFAULTS
from config.rules import ATTRIBUTE_RULES, SCRIPT_RULES, TAG_RE
from utils.code_shapes import inject_body_end, script_safe
from utils.template_engine import render_template

ROUTER_MARKER = "data-sandbox-router"


def _sanitize_tag(match):
    tag = match.group(0)
    for pattern, replacement, _ in ATTRIBUTE_RULES:
        tag = pattern.sub(replacement, tag)
    return tag


def sanitize(html):
    """Strip escape vectors from a document. Pure text rewriting."""
    html = TAG_RE.sub(_sanitize_tag, html)
    for pattern, replacement, _ in SCRIPT_RULES:
        html = pattern.sub(replacement, html)
    return html


def page_slugs(pages):
    """Router page names from PageInfo objects, dicts or plain strings."""
    slugs = []
    for page in pages or ():
        if isinstance(page, str):
            name = page
        elif isinstance(page, dict):
            name = str(page.get("name", ""))
        else:
            name = page.name
        slug = "-".join(name.lower().split())
        if slug:
            slugs.append(slug)
    return slugs


def inject_router(html, pages=()):
    """Append the virtual router once, before </body> when there is one."""
    if ROUTER_MARKER in html:
        return html
    script = render_template("sandbox", "router.js.tpl", {
        "pages": script_safe(json.dumps(page_slugs(pages))),
        "mock_delay": DEFAULTS["mock_delay_ms"],
        "saved_revert": DEFAULTS["saved_revert_ms"],
        "toast_ms": DEFAULTS["toast_ms"],
    })
    return inject_body_end(html, script.rstrip())


def isolate(html, pages=()):
    return inject_router(sanitize(html), pages)
