"""Directive builders.

Every directive is assembled from independent concern blocks, each a pure
function of the config, joined in a fixed order. Nothing here touches the
network.
"""

import json

from config.defaults import DEFAULTS
from config.design import (
    DESIGN_SYSTEM_NOTES,
    FEATURE_RULES,
    KNOWN_SECTIONS,
    MONOCHROME_COLORS,
    MONOCHROME_ID,
    PALETTE_ROLES,
)
from config.stacks import STACKS

OUTPUT_FORMATS = {
    "html": (
        "OUTPUT FORMAT:\n"
        "- One complete HTML5 document starting with <!DOCTYPE html>\n"
        "- Load Tailwind with <script src=\"https://cdn.tailwindcss.com\"></script> in <head>\n"
        "- Vanilla JavaScript in a single <script> before </body>; no frameworks"
    ),
    "react": (
        "OUTPUT FORMAT:\n"
        "- One React functional component in TypeScript (src/App.tsx)\n"
        "- Import hooks from 'react' and end with `export default App`\n"
        "- Style with Tailwind classes via className; no CSS files"
    ),
    "nextjs": (
        "OUTPUT FORMAT:\n"
        "- One Next.js App Router page in TypeScript (app/page.tsx)\n"
        "- Start with \"use client\"; when the page uses hooks or event handlers\n"
        "- Export the page component as the default export\n"
        "- Style with Tailwind classes via className"
    ),
    "vue": (
        "OUTPUT FORMAT:\n"
        "- One Vue 3 single-file component (src/App.vue)\n"
        "- <script setup lang=\"ts\"> first, then <template>; Composition API only\n"
        "- Style with Tailwind classes; no <style> block needed"
    ),
    "svelte": (
        "OUTPUT FORMAT:\n"
        "- One Svelte component (src/App.svelte)\n"
        "- <script lang=\"ts\"> first, then markup; use on:click and bind:value\n"
        "- Style with Tailwind classes"
    ),
}

NAV_RULES = {
    "topnav": "NAVIGATION: a sticky top navigation bar with the brand on the left and links on the right.",
    "sidebar": "NAVIGATION: a fixed left sidebar with vertical links; content scrolls to its right.",
    "bottomnav": "NAVIGATION: a fixed bottom tab bar with icon+label items, mobile style.",
    "none": "NAVIGATION: no navigation chrome.",
}

INTERACTION_RULES = {
    "static": "INTERACTIVITY: static layout. Hover states only, no scripted behavior.",
    "micro": ("INTERACTIVITY: micro-interactions. Hover and focus states on every control, "
              "smooth transitions (transition-all duration-300), working menus and toggles."),
    "full": ("INTERACTIVITY: fully interactive. Every button has a click handler with visible "
             "feedback, forms validate and submit, modals and dropdowns open and close."),
}

OUTPUT_RULES = (
    "OUTPUT RULES (STRICT):\n"
    "- Output ONLY the code. No explanations, no markdown, no code fences\n"
    "- Use realistic, descriptive text instead of lorem ipsum\n"
    "- Mobile-first responsive layout (sm:, md:, lg:)"
)


def role_block(stack, from_image):
    target = STACKS[stack]["name"]
    if from_image:
        return (
            f"You convert UI sketches into production-ready {target} code.\n"
            "Read the attached sketch: boxes are containers or cards, short lines are "
            "text, small squares are buttons or icons, circles are avatars. "
            "Reproduce its layout faithfully."
        )
    return f"You write production-ready {target} code from a written description of a UI."


def prompt_block(text_prompt):
    if not text_prompt:
        return ""
    return f"DESCRIPTION:\n{text_prompt}"


def output_format_block(stack):
    return OUTPUT_FORMATS[stack]


def sections_block(sections):
    if not sections:
        return ""
    return "SECTIONS (in order): " + ", ".join(sections)


def theme_block(config):
    """Palette and design-system rules.

    The monochrome palette pins the exact color set and names no other hex
    value.
    """
    note = DESIGN_SYSTEM_NOTES.get(config.design_system, "")
    if config.color_palette.id == MONOCHROME_ID:
        lines = [
            "THEME: strict black and white.",
            "- Use ONLY these colors: " + ", ".join(MONOCHROME_COLORS),
            "- No other color values, no tinted grays, no colored accents",
        ]
    else:
        pairs = zip(PALETTE_ROLES, config.color_palette.colors)
        lines = ["THEME: apply this palette with Tailwind arbitrary values (e.g. bg-[#hex])."]
        lines.extend(f"- {role}: {color}" for role, color in pairs)
    if note:
        lines.append(f"- Design system: {note}")
    return "\n".join(lines)


def navigation_block(nav_type):
    return NAV_RULES.get(nav_type, NAV_RULES["topnav"])


def interaction_block(level):
    return INTERACTION_RULES.get(level, INTERACTION_RULES["micro"])


def feature_blocks(features):
    rules = [FEATURE_RULES[f] for f in sorted(features) if f in FEATURE_RULES]
    if not rules:
        return ""
    return "FEATURES:\n" + "\n".join(f"- {r}" for r in rules)


def page_count(config, sections):
    """Pages the output must contain.

    Declared pages win; otherwise analysis sections named like ``page-2``
    count as pages.
    """
    if config.pages:
        return len(config.pages)
    return sum(1 for s in sections if s.startswith("page"))


def routing_block(config, sections):
    """Multi-page routing rules, or "" for a single page."""
    count = page_count(config, sections)
    if count <= 1:
        return ""

    if config.pages:
        listing = "\n".join(
            f"- Page {i}: \"{p.name}\"" + (f" ({p.role})" if p.role else "")
            for i, p in enumerate(config.pages, 1)
        )
    else:
        listing = "\n".join(f"- Page {i}" for i in range(1, count + 1))

    kind = STACKS[config.tech_stack]["kind"]
    if kind == "markup":
        how = (
            "1. Wrap each page in <div id=\"page-N\" data-page=\"<slug>\"> (N from 1)\n"
            "2. Only page-1 is visible initially; the others use style=\"display:none\"\n"
            "3. Define function showPage(n) that hides every [id^=\"page-\"] and shows page-n\n"
            "4. Navigation controls carry data-navigate=\"page-N\" and call showPage(N)"
        )
    else:
        how = (
            "1. Keep the current page in component state, starting at the first page\n"
            "2. Render one page at a time, each wrapped in an element with data-page=\"<slug>\"\n"
            "3. Navigation controls carry data-navigate=\"<slug>\" and switch the current page"
        )

    block = f"MULTI-PAGE ({count} pages, generate ALL of them):\n{listing}\n{how}"
    if config.page_flow_instructions:
        block += f"\nNAVIGATION FLOW:\n{config.page_flow_instructions}"
    return block


def join_blocks(*blocks):
    return "\n\n".join(b for b in blocks if b)


def build_scaffold_directive(config, sections, from_image):
    """Full scaffold directive for one stack, blocks in a fixed order."""
    return join_blocks(
        role_block(config.tech_stack, from_image),
        prompt_block("" if from_image else config.text_prompt),
        output_format_block(config.tech_stack),
        sections_block(sections),
        theme_block(config),
        navigation_block(config.nav_type),
        interaction_block(config.interaction_level),
        feature_blocks(config.features),
        routing_block(config, sections),
        OUTPUT_RULES,
    )


def build_analysis_directive(text_prompt=""):
    """Ask for a small JSON description of the layout."""
    shape = json.dumps({
        "sections": ["hero", "features", "pricing", "footer"],
        "nav_type": "topnav | sidebar | bottomnav | none",
        "page_type": "landing | dashboard | form | blog | ecommerce",
    }, indent=2)
    subject = "the UI described below" if text_prompt else "this UI sketch"
    lines = [
        f"Analyze {subject}. Return ONLY a JSON object shaped like:",
        shape,
        "Section names come from: " + ", ".join(KNOWN_SECTIONS) + ".",
        "Be concise. Only JSON, no explanation.",
    ]
    if text_prompt:
        lines.append(f"DESCRIPTION:\n{text_prompt}")
    return "\n\n".join(lines)


def build_styling_directive(code, config, budget=None):
    """Second pass: enhance the scaffold's styling without changing structure."""
    budget = budget or DEFAULTS["styling_input_budget"]
    stack_name = STACKS[config.tech_stack]["name"]
    checklist = [
        "STYLING CHECKLIST:",
        "- Keep every section, element and script; change classes only",
        "- Depth: shadows (shadow-lg, shadow-xl) and rounded corners (rounded-xl)",
        "- Motion: hover states and transitions (hover:, transition-all)",
        "- Typography: clear hierarchy (text-4xl headings, font-semibold labels)",
        "- Return the COMPLETE code, never a fragment",
    ]
    if STACKS[config.tech_stack]["kind"] == "markup":
        checklist.append("- Keep the <!DOCTYPE html> declaration")
    if config.interaction_level == "full":
        checklist.append("- Add click handlers and active states to every control")
    return join_blocks(
        f"Enhance the styling of this {stack_name} code.",
        "CURRENT CODE:\n" + code[:budget],
        theme_block(config),
        "\n".join(checklist),
        OUTPUT_RULES,
    )


def build_edit_directive(existing_code, command, stack):
    """Apply one natural-language edit to existing code."""
    return join_blocks(
        f"You modify existing {STACKS[stack]['name']} code.",
        "EXISTING CODE:\n" + existing_code,
        f"EDIT COMMAND: {command}",
        ("RULES:\n"
         "- Apply only the requested change; keep every unrelated part exactly as it is\n"
         "- New elements get hover states and working interactions\n"
         "- Return the complete modified code"),
        OUTPUT_RULES,
    )
