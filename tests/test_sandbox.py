"""Tests for core.sandbox - escape stripping and router injection."""

from core.sandbox import ROUTER_MARKER, inject_router, isolate, page_slugs, sanitize
from core.state import PageInfo

PAGE = """<!DOCTYPE html>
<html><head><title>x</title></head>
<body>
<div id="page-1"><a href="https://example.com" target="_blank">Docs</a></div>
<div id="page-2" style="display:none"><button>Save</button></div>
</body>
</html>"""


# ---------------------------------------------------------------------------
# sanitize
# ---------------------------------------------------------------------------

def test_removes_target_attributes():
    html = sanitize('<a href="/a" target="_blank">A</a><form target=_top></form>')
    assert "target" not in html
    assert '<a href="/a">A</a>' in html


def test_keeps_jsx_target_expression_untouched_by_unquoted_rule():
    html = sanitize("<a href={url} target={dest}>x</a>")
    assert "target={dest}" in html


def test_target_in_text_is_kept():
    assert sanitize("<p>Our target = growth</p>") == "<p>Our target = growth</p>"


def test_neutralizes_javascript_links():
    assert sanitize('<a href="javascript:alert(1)">x</a>') == '<a href="#">x</a>'
    assert sanitize("<a href='JavaScript:void(0)'>x</a>") == "<a href='#'>x</a>"


def test_escaped_quotes_in_embedded_source():
    html = sanitize('const s = "<a href=\\"/x\\" target=\\"_blank\\">x</a>";')
    assert "target" not in html


def test_blocks_location_assignment():
    html = sanitize("<script>window.location.href = '/login';</script>")
    assert "// blocked:" in html
    assert "window.location.href = " not in html


def test_blocks_location_href_assignment():
    html = sanitize("<script>location.href = '/x'</script>")
    assert html.startswith("<script>// blocked:")


def test_blocks_owned_location_assignment():
    html = sanitize("<script>top.location = '/x'</script>")
    assert html.startswith("<script>// blocked:")


def test_local_location_binding_is_kept():
    code = "function App() {\n  const location = 'Berlin';\n  return <p>{location}</p>;\n}"
    assert sanitize(code) == code


def test_location_parameter_and_destructuring_are_kept():
    code = "function show(location = 'home') { let { location: loc } = props; location = loc; }"
    assert sanitize(code) == code


def test_comparison_is_not_blocked():
    code = "<script>if (location.href == '/x') {}</script>"
    assert sanitize(code) == code


def test_blocks_location_calls_and_window_open():
    html = sanitize("<script>top.location.replace('/x'); window.open('/y');</script>")
    assert "location.replace(" not in html
    assert "window.open(" not in html
    assert html.count("// blocked:") == 2


def test_object_property_named_location_is_kept():
    code = "<script>const place = item.location = 'Paris';</script>"
    assert sanitize(code) == code


def test_sanitize_idempotent():
    once = sanitize(PAGE)
    assert sanitize(once) == once


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------

def test_router_injected_before_body_close():
    html = inject_router(PAGE)
    assert ROUTER_MARKER in html
    assert html.index(ROUTER_MARKER) < html.rindex("</body>")


def test_router_appended_without_body():
    html = inject_router("<p>fragment</p>")
    assert html.startswith("<p>fragment</p>")
    assert ROUTER_MARKER in html


def test_router_injected_once():
    once = inject_router(PAGE)
    assert inject_router(once) == once
    assert once.count(ROUTER_MARKER) == 1


def test_router_carries_page_slugs_and_delays():
    html = inject_router(PAGE, [PageInfo(name="Home"), PageInfo(name="Contact Us")])
    assert '["home", "contact-us"]' in html
    assert "800" in html


def test_router_navigation_reads_data_navigate_then_href():
    html = inject_router(PAGE)
    assert "el.getAttribute('data-navigate') || el.getAttribute('href')" in html
    assert "addEventListener('click'" in html
    assert "}, true);" in html
    assert "event.preventDefault();\n    event.stopPropagation();" in html
    assert "el.style.display = el === page ? '' : 'none';" in html


def test_router_mock_interaction_branches():
    html = inject_router(PAGE)
    assert "setLabel('Loading...');" in html
    assert "var MOCK_DELAY = 800;" in html
    saved = html.index("setLabel('Saved!');")
    assert html.index("label.indexOf('submit')") < saved
    assert "later(function () { setLabel(original); }, SAVED_REVERT);" in html
    assert html.index("label.indexOf('login')") < html.index("showToast('Logged in successfully');")
    assert "addEventListener('submit'" in html


def test_router_timers_bypass_rerendering_runtimes():
    html = inject_router(PAGE)
    assert "window.__sandboxSetTimeout || window.setTimeout" in html
    body = html[html.index("function mockAction"):]
    assert "setTimeout(function" not in body


def test_page_slugs_accepts_mixed_inputs():
    assert page_slugs([PageInfo(name="My Page"), {"name": "Pricing"}, "About", ""]) == \
        ["my-page", "pricing", "about"]
    assert page_slugs(None) == []


def test_isolate_idempotent():
    once = isolate(PAGE, ["home"])
    assert isolate(once, ["home"]) == once
    assert "target=" not in once
