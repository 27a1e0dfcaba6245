"""Deterministic fallback sources, keyed on the detected sections.

Used when the collaborator returns nothing usable. The same config and
sections always render byte-identical output.
"""

import html
import re

from config.design import DEFAULT_COLORS, MONOCHROME_ID, MONOCHROME_COLORS
from config.stacks import STACKS
from core.state import DEFAULT_LAYOUT
from utils.template_engine import list_templates, render_template

SNIPPETS = frozenset(
    name[:-len(".html.tpl")]
    for name in list_templates("fallback/sections")
    if name != "generic.html.tpl"
)

_JSX_ATTRS = [
    (re.compile(r"\bclass="), "className="),
    (re.compile(r"\bfor="), "htmlFor="),
]

# Sections rendered outside the page containers.
_CHROME = ("nav", "footer")


def palette_vars(config):
    if config.color_palette.id == MONOCHROME_ID:
        primary, secondary, accent, light, background = (
            MONOCHROME_COLORS[0], MONOCHROME_COLORS[4], MONOCHROME_COLORS[5],
            MONOCHROME_COLORS[1], MONOCHROME_COLORS[8],
        )
    else:
        colors = list(config.color_palette.colors) + DEFAULT_COLORS[len(config.color_palette.colors):]
        primary, secondary, accent, light, background = colors[:5]
    return {
        "primary": primary,
        "secondary": secondary,
        "accent": accent,
        "light": light,
        "background": background,
    }


def page_title(config):
    if config.pages:
        name = config.pages[0].name
    else:
        name = config.page_type.replace("-", " ").replace("_", " ").title() or "Home"
    return html.escape(name)


def _heading(section):
    return re.sub(r"[-_]+", " ", section).strip().title() or "Section"


def _slug(section):
    return re.sub(r"[^a-z0-9]+", "-", section.lower()).strip("-") or "section"


def _nav_links(sections, pages, palette):
    if len(pages) > 1:
        targets = [(p.slug, html.escape(p.name), f"page-{i}") for i, p in enumerate(pages, 1)]
        return "\n      ".join(
            f'<a href="#{slug}" data-navigate="{page_id}" class="hover:text-[{palette["primary"]}]">{name}</a>'
            for slug, name, page_id in targets
        )
    return "\n      ".join(
        f'<a href="#{_slug(s)}" class="hover:text-[{palette["primary"]}]">{_heading(s)}</a>'
        for s in sections if s not in _CHROME
    )


def render_section(section, variables):
    if section in SNIPPETS:
        return render_template("fallback/sections", f"{section}.html.tpl", variables)
    heading = html.escape(_heading(section))
    return render_template("fallback/sections", "generic.html.tpl", dict(
        variables, slug=_slug(section), heading=heading, heading_lower=heading.lower(),
    ))


def _dedupe(sections):
    seen = []
    for s in sections:
        s = str(s).strip().lower()
        if s and s not in seen:
            seen.append(s)
    return seen


def render_body(config, sections, hide_pages=False):
    """Markup for every section, split into page containers when needed."""
    sections = _dedupe(sections) or list(DEFAULT_LAYOUT.sections)
    palette = palette_vars(config)
    variables = dict(palette, title=page_title(config),
                     nav_links=_nav_links(sections, config.pages, palette))

    head = [render_section("nav", variables)] if "nav" in sections else []
    tail = [render_section("footer", variables)] if "footer" in sections else []
    main = [render_section(s, variables) for s in sections if s not in _CHROME]

    if len(config.pages) <= 1:
        return "\n".join(head + main + tail)

    hidden = ' style="display:none"' if hide_pages else ""
    pages = [f'<div id="page-1" data-page="{config.pages[0].slug}">\n' + "\n".join(main) + "\n</div>"]
    for i, page in enumerate(config.pages[1:], 2):
        inner = render_section(page.slug, variables)
        pages.append(f'<div id="page-{i}" data-page="{page.slug}"{hidden}>\n{inner}\n</div>')
    return "\n".join(head + pages + tail)


def to_jsx(markup):
    for pattern, replacement in _JSX_ATTRS:
        markup = pattern.sub(replacement, markup)
    return markup


def _indent(text, prefix):
    return "\n".join(prefix + line if line.strip() else line for line in text.splitlines())


def render_fallback(stack, config, sections):
    """Fallback source for one stack."""
    kind = STACKS[stack]["kind"]
    body = render_body(config, sections, hide_pages=kind == "markup")
    palette = palette_vars(config)
    title = page_title(config)

    if kind == "markup":
        return render_template("fallback", "page.html.tpl", dict(palette, title=title, body=body))
    if kind == "jsx":
        return render_template("fallback", "component.jsx.tpl", dict(
            palette,
            body=_indent(to_jsx(body), "      "),
            directive='"use client";\n\n' if stack == "nextjs" else "",
        ))
    template = "component.vue.tpl" if stack == "vue" else "component.svelte.tpl"
    return render_template("fallback", template, dict(
        palette, title=title, body=_indent(body, "    "),
    ))
