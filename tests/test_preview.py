"""Tests for core.preview - every stack compiles to one document."""

import json
import re

import pytest
from unittest.mock import MagicMock, patch

from core.preview import compile_preview, placeholder, preview_document
from core.sandbox import ROUTER_MARKER

REACT_APP = """import { useState } from 'react';
import { Card } from './components/Card';
import './index.css';

export default function App() {
  const [count, setCount] = useState(0);
  return <button onClick={() => setCount(count + 1)}>Clicked {count}</button>;
}
"""

VUE_APP = """<script setup lang="ts">
import { ref } from 'vue'
const count = ref(0)
function inc() { count.value++ }
</script>

<template>
  <button @click="inc">{{ count }}</button>
</template>

<style scoped>
button { color: red; }
</style>
"""

SVELTE_APP = """<script>
  import { onMount } from 'svelte';
  let count = 0;
  $: doubled = count * 2;
</script>

<button on:click={() => count += 1}>{count} / {doubled}</button>
"""


def _embedded(document, name):
    """Pull a JSON literal assigned to ``var <name> =`` in a harness."""
    match = re.search(r"var %s = (.*?);\n" % name, document)
    return json.loads(match.group(1).replace("<\\/", "</"))


# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("source", ["", "   \n  ", None])
def test_empty_source_gives_placeholder(source):
    document = compile_preview(source, "react")
    assert document.startswith("<!DOCTYPE html>")
    assert "Nothing to preview" in document


def test_unknown_stack_gives_placeholder():
    assert "not available for angular" in compile_preview("<p>x</p>", "angular")


def test_placeholder_escapes_text():
    assert "&lt;b&gt;" in placeholder("x", "<b>")


def test_compiler_crash_gives_placeholder():
    with patch.dict("core.preview.COMPILERS", {"react": MagicMock(side_effect=RuntimeError("boom"))}):
        document = compile_preview("export default function App() {}", "react")
    assert "Preview unavailable" in document


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

def test_html_document_passes_through_with_tailwind():
    source = "<!DOCTYPE html><html><head></head><body><p>Hi</p></body></html>"
    document = compile_preview(source, "html")
    assert document.startswith("<!DOCTYPE html>")
    assert "<p>Hi</p>" in document
    assert "cdn.tailwindcss.com" in document


def test_html_fragment_is_wrapped():
    document = compile_preview("<section>Fragment</section>", "html")
    assert document.startswith("<!DOCTYPE html>")
    assert "<section>Fragment</section>" in document
    assert "</body>" in document


def test_html_adds_show_page_for_multi_page():
    source = '<!DOCTYPE html><html><body><div id="page-1">A</div><div id="page-2">B</div></body></html>'
    assert "function showPage" in compile_preview(source, "html")


def test_html_keeps_existing_show_page():
    source = ('<!DOCTYPE html><html><body><div id="page-1">A</div>'
              '<script>function showPage(n) {}</script></body></html>')
    assert compile_preview(source, "html").count("function showPage") == 1


# ---------------------------------------------------------------------------
# React / Next.js
# ---------------------------------------------------------------------------

def test_react_harness_embeds_cleaned_source():
    document = compile_preview(REACT_APP, "react")
    assert "react.development.js" in document or "react@18" in document
    assert "@babel/standalone" in document
    source = _embedded(document, "source")
    assert "import" not in source
    assert "export" not in source
    assert "function App()" in source
    assert "React.createElement(App)" in document


def test_next_strips_use_client():
    document = compile_preview('"use client";\n' + REACT_APP, "nextjs")
    assert "use client" not in _embedded(document, "source")


def test_react_named_export_identifier():
    source = "const Landing = () => <main>Hi</main>;\nexport default Landing;\n"
    document = compile_preview(source, "react")
    assert "React.createElement(Landing)" in document


def test_react_anonymous_default():
    document = compile_preview("export default () => <p>anon</p>;", "react")
    assert "React.createElement(__DefaultExport)" in document


def test_react_without_component_gives_placeholder():
    document = compile_preview("const x = 1;", "react")
    assert "No component named App" in document


def test_react_closing_script_in_source_is_escaped():
    source = 'export default function App() { return <p>{"</script>"}</p>; }'
    document = compile_preview(source, "react")
    assert document.count("</script>") == document.count("<script")


# ---------------------------------------------------------------------------
# Vue
# ---------------------------------------------------------------------------

def test_vue_harness_splits_blocks():
    document = compile_preview(VUE_APP, "vue")
    assert "vue.global" in document
    assert _embedded(document, "template").strip() == '<button @click="inc">{{ count }}</button>'
    script = _embedded(document, "script")
    assert "import" not in script
    assert "const count = ref(0)" in script
    assert _embedded(document, "bindings") == ["count", "inc"]
    assert "color: red" not in document


def test_vue_options_api_detected():
    source = "<template><p>{{ msg }}</p></template>\n<script>\nexport default { data() { return { msg: 'hi' } } }\n</script>"
    document = compile_preview(source, "vue")
    assert "var usesOptions = true;" in document


def test_vue_without_template_gives_placeholder():
    assert "No &lt;template&gt; block" in compile_preview("<style>p{}</style>", "vue")


# ---------------------------------------------------------------------------
# Svelte
# ---------------------------------------------------------------------------

def test_svelte_harness_extracts_reactive_statements():
    document = compile_preview(SVELTE_APP, "svelte")
    assert _embedded(document, "reactive") == ["doubled = count * 2"]
    script = _embedded(document, "script")
    assert "$:" not in script
    assert "import" not in script
    assert _embedded(document, "mutable") == ["count"]
    assert "{count} / {doubled}" in _embedded(document, "markup")


def test_svelte_preview_exposes_native_timer_to_router():
    document = preview_document(SVELTE_APP, "svelte")
    exposed = document.index("window.__sandboxSetTimeout = nativeTimeout;")
    assert exposed < document.index("window.setTimeout = function")
    assert document.index(ROUTER_MARKER) > exposed


def test_svelte_markup_only():
    document = compile_preview("<h1>Hello</h1>", "svelte")
    assert _embedded(document, "markup") == "<h1>Hello</h1>"


# ---------------------------------------------------------------------------
# preview_document
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("stack,source", [
    ("html", "<p>Hi</p>"),
    ("react", REACT_APP),
    ("vue", VUE_APP),
    ("svelte", SVELTE_APP),
])
def test_preview_document_is_isolated(stack, source):
    document = preview_document(source, stack)
    assert document.startswith("<!DOCTYPE html>")
    assert document.count(ROUTER_MARKER) == 1


def test_preview_document_strips_escapes():
    source = '<!DOCTYPE html><html><body><a href="/x" target="_blank">x</a></body></html>'
    assert 'target="_blank"' not in preview_document(source, "html")
