"""Tests for synthesizers.prompts directive builders."""

import re

from config.design import MONOCHROME_COLORS
from core.state import ColorPalette, GenerationConfig, PageInfo
from synthesizers.prompts import (
    build_analysis_directive,
    build_edit_directive,
    build_scaffold_directive,
    build_styling_directive,
    feature_blocks,
    page_count,
    routing_block,
    theme_block,
)


def _config(stack="html", **kwargs):
    return GenerationConfig(tech_stack=stack, **kwargs)


def _pages(*names):
    return tuple(PageInfo(name=n) for n in names)


# ---------------------------------------------------------------------------
# Scaffold directive
# ---------------------------------------------------------------------------

def test_scaffold_block_order():
    config = _config(text_prompt="A landing page for a bakery", features=frozenset({"modals"}))
    directive = build_scaffold_directive(config, ["hero", "footer"], from_image=False)
    order = ["DESCRIPTION:", "OUTPUT FORMAT:", "SECTIONS (in order): hero, footer",
             "THEME:", "NAVIGATION:", "INTERACTIVITY:", "FEATURES:", "OUTPUT RULES"]
    positions = [directive.index(marker) for marker in order]
    assert positions == sorted(positions)


def test_scaffold_from_image_describes_sketch():
    directive = build_scaffold_directive(_config(text_prompt="ignored"), [], from_image=True)
    assert "sketch" in directive
    assert "DESCRIPTION:" not in directive
    assert "SECTIONS" not in directive


def test_scaffold_is_deterministic():
    config = _config(stack="vue", features=frozenset({"toasts", "forms", "loading"}))
    first = build_scaffold_directive(config, ["hero"], from_image=True)
    assert build_scaffold_directive(config, ["hero"], from_image=True) == first


def test_scaffold_mentions_stack_format():
    assert "src/App.svelte" in build_scaffold_directive(_config("svelte"), [], from_image=True)
    assert "app/page.tsx" in build_scaffold_directive(_config("nextjs"), [], from_image=True)


def test_feature_blocks_sorted_and_filtered():
    block = feature_blocks(frozenset({"toasts", "forms", "unknown"}))
    assert block.index("Form validation") < block.index("Toast notifications")
    assert "unknown" not in block
    assert feature_blocks(frozenset()) == ""


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

def test_theme_pairs_roles_with_colors():
    config = _config(color_palette=ColorPalette(id="ocean", colors=("#0077B6", "#00B4D8")))
    block = theme_block(config)
    assert "- Primary: #0077B6" in block
    assert "- Secondary: #00B4D8" in block


def test_monochrome_theme_lists_only_allowed_colors():
    config = _config(color_palette=ColorPalette(id="bw", colors=("#FF0000",)))
    block = theme_block(config)
    hex_values = set(re.findall(r"#[0-9A-Fa-f]{3,6}\b", block))
    assert hex_values <= set(MONOCHROME_COLORS)
    assert "#FF0000" not in block


# ---------------------------------------------------------------------------
# Multi-page routing
# ---------------------------------------------------------------------------

def test_single_page_has_no_routing():
    assert routing_block(_config(pages=_pages("Home")), []) == ""
    assert routing_block(_config(), ["hero"]) == ""


def test_markup_routing_lists_pages():
    config = _config(pages=_pages("Home", "Pricing", "Contact"),
                     page_flow_instructions="Pricing links to Contact")
    block = routing_block(config, [])
    assert "3 pages" in block
    assert 'Page 2: "Pricing"' in block
    assert "showPage" in block
    assert "Pricing links to Contact" in block


def test_component_routing_uses_state():
    block = routing_block(_config("react", pages=_pages("Home", "About")), [])
    assert "component state" in block
    assert "showPage" not in block


def test_page_count_from_sections():
    assert page_count(_config(), ["page-1", "page-2", "footer"]) == 2
    assert page_count(_config(pages=_pages("A", "B", "C")), ["page-1"]) == 3


# ---------------------------------------------------------------------------
# Analysis, styling, edit
# ---------------------------------------------------------------------------

def test_analysis_directive_for_image():
    directive = build_analysis_directive()
    assert "this UI sketch" in directive
    assert '"nav_type"' in directive
    assert "DESCRIPTION" not in directive


def test_analysis_directive_for_text():
    directive = build_analysis_directive("an admin dashboard")
    assert directive.endswith("DESCRIPTION:\nan admin dashboard")


def test_styling_directive_truncates_code():
    code = "<div>" + "x" * 20000 + "</div>"
    directive = build_styling_directive(code, _config(), budget=1000)
    assert "x" * 995 in directive
    assert "x" * 1001 not in directive
    assert "<!DOCTYPE html>" in directive


def test_styling_directive_full_interaction():
    directive = build_styling_directive("<div></div>", _config("react", interaction_level="full"))
    assert "click handlers" in directive
    assert "DOCTYPE" not in directive


def test_edit_directive_embeds_code_verbatim():
    code = "<template><p>Hi</p></template>"
    directive = build_edit_directive(code, "make it bold", "vue")
    assert "EXISTING CODE:\n" + code in directive
    assert "EDIT COMMAND: make it bold" in directive
    assert "Vue 3 SFC" in directive
