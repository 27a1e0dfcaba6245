"""Vue and Svelte single-file component synthesizers."""

import re

from synthesizers.base import Synthesizer
from utils.code_shapes import strip_leading_comment

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script>", re.DOTALL | re.IGNORECASE)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style>", re.DOTALL | re.IGNORECASE)


class VueSynthesizer(Synthesizer):
    stack = "vue"
    description = "Vue 3 single-file component with script setup"

    def normalize(self, text):
        code = strip_leading_comment(text).strip()
        if re.search(r"<template\b", code, re.IGNORECASE):
            return code + "\n"

        # Bare markup: keep script and style blocks, wrap the rest.
        scripts = _SCRIPT_RE.findall(code)
        styles = _STYLE_RE.findall(code)
        markup = _STYLE_RE.sub("", _SCRIPT_RE.sub("", code)).strip()
        parts = scripts + [f"<template>\n  <div>\n{markup}\n  </div>\n</template>"] + styles
        return "\n\n".join(parts) + "\n"


class SvelteSynthesizer(Synthesizer):
    stack = "svelte"
    description = "Svelte component"

    def normalize(self, text):
        return strip_leading_comment(text).strip() + "\n"
