"""Single-file HTML + Tailwind synthesizer."""

import re

from core.state import GeneratedFile
from synthesizers.base import Synthesizer
from utils.code_shapes import cut_before_doctype, ensure_tailwind, has_doctype, inject_body_end
from utils.template_engine import load_template, render_template

_OWN_SCRIPT_RE = re.compile(r"<script(?![^>]*cdn\.tailwindcss\.com)", re.IGNORECASE)


class HtmlSynthesizer(Synthesizer):
    stack = "html"
    description = "Complete HTML5 document styled with the Tailwind CDN"

    def normalize(self, text, title="Generated Page"):
        text = cut_before_doctype(text.strip())
        if not has_doctype(text):
            if "<html" in text.lower():
                text = "<!DOCTYPE html>\n" + text
            else:
                text = render_template("html", "document.html.tpl", {"title": title, "body": text})
        return ensure_tailwind(text)

    def package(self, code, config):
        # Pages without a script of their own get the smooth-scroll and form helpers.
        if not _OWN_SCRIPT_RE.search(code):
            code = inject_body_end(code, load_template("html", "enhancer.js.tpl").rstrip())
        return (GeneratedFile(path=self.entry_file, content=code, language=self.language),)
