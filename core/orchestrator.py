"""Pipeline orchestrator: analyzing -> scaffold -> styling -> complete.

One run is strictly sequential. The only suspension points are the
collaborator calls, each bounded by min(phase budget, time left in the run).
"""

import logging
import os
import time

from config.defaults import DEFAULTS
from config.stacks import NAV_TYPES
from core.classifier import default_layout
from core.errors import (
    CollaboratorTimeout,
    CollaboratorUnavailable,
    error_kind,
    friendly_message,
)
from core.preview import preview_document
from core.request import validate_edit_request
from core.state import DEFAULT_LAYOUT, GeneratedFile, LayoutAnalysis, PipelineStage
from synthesizers.prompts import (
    build_analysis_directive,
    build_edit_directive,
    build_styling_directive,
)
from synthesizers.registry import get_synthesizer
from utils import llm
from utils.code_shapes import extract_json, has_doctype, strip_code_fences

logger = logging.getLogger(__name__)


class SinkClosed(Exception):
    """The consumer went away; the run stops quietly."""


class _Run:
    """Per-run state: the sink, the deadline and the last emitted stage."""

    def __init__(self, sink, budget):
        self.sink = sink
        self.deadline = time.monotonic() + budget
        self.last = None

    def emit(self, stage_name, progress, **payload):
        if self.sink.closed:
            raise SinkClosed()
        if self.last is not None and progress < self.last.progress:
            logger.warning("Refusing to emit %s at %d%% after %d%%",
                           stage_name, progress, self.last.progress)
            return self.last
        stage = PipelineStage(stage=stage_name, progress=progress, **payload)
        self.sink.emit(stage)
        self.last = stage
        return stage

    def ensure_open(self):
        if self.sink.closed:
            raise SinkClosed()

    def timeout(self, phase):
        """Seconds allowed for one collaborator call in this phase."""
        remaining = self.deadline - time.monotonic()
        if remaining <= 0:
            raise CollaboratorTimeout(
                f"Generation exceeded the {DEFAULTS['pipeline_timeout']}s budget"
            )
        return min(DEFAULTS[phase], remaining)


def looks_styled(code):
    """True when the source already carries every rich-styling marker."""
    if len(code) <= DEFAULTS["styling_skip_min_length"]:
        return False
    return all(marker in code for marker in DEFAULTS["styling_skip_markers"])


def parse_analysis(reply, defaults):
    """LayoutAnalysis from a JSON reply; None if the reply is unusable."""
    data = extract_json(reply)
    if not data:
        return None
    sections = data.get("sections")
    if not isinstance(sections, list):
        return None
    sections = tuple(str(s).strip().lower() for s in sections if str(s).strip())
    nav_type = data.get("nav_type") or data.get("navType")
    page_type = data.get("page_type") or data.get("pageType")
    return LayoutAnalysis(
        sections=sections or defaults.sections,
        nav_type=nav_type if nav_type in NAV_TYPES else defaults.nav_type,
        page_type=str(page_type) if page_type else defaults.page_type,
    )


class Orchestrator:
    """Runs generation pipelines and single edits.

    ``generate`` is the collaborator call, ``generate(prompt, image=None,
    timeout=None, **kwargs) -> str``; it defaults to utils.llm.invoke.
    """

    def __init__(self, generate=None):
        self.generate = generate

    def _generate(self, prompt, **kwargs):
        return (self.generate or llm.invoke)(prompt, **kwargs)

    def run_from_image(self, config, image, sink):
        return self._run(config, image, sink)

    def run_from_text(self, config, sink):
        return self._run(config, None, sink)

    def _run(self, config, image, sink):
        """Drive one run to a terminal stage and return it.

        Returns the last emitted stage if the sink closes mid-run.
        """
        run = _Run(sink, DEFAULTS["pipeline_timeout"])
        try:
            synthesizer = get_synthesizer(config.tech_stack)

            # Stage 1: analysis (advisory, never fails the run)
            run.emit("analyzing", 10)
            layout = self._analyze(config, image, run)
            run.emit("analyzing", 25)

            # Stage 2: scaffold
            run.emit("scaffold", 30)
            run.ensure_open()
            code = synthesizer.synthesize_scaffold(
                config, list(layout.sections), image=image,
                generate=self._generate, timeout=run.timeout("scaffold_timeout"),
            )
            files = (GeneratedFile(path=synthesizer.entry_file, content=code,
                                   language=synthesizer.language),)
            preview = None
            if config.tech_stack == "html":
                preview = preview_document(code, "html", config.pages)
            run.emit("scaffold", 50, code=code, files=files, preview_html=preview)

            # Stage 3: styling
            run.emit("styling", 60)
            code = self._style(code, config, synthesizer, run)
            run.emit("styling", 80, code=code,
                     preview_html=preview_document(code, config.tech_stack, config.pages))

            # Stage 4: package
            run.emit("complete", 90)
            files = synthesizer.package(code, config)
            return run.emit("complete", 100, code=code, files=files,
                            preview_html=preview_document(files[0].content, config.tech_stack, config.pages))

        except SinkClosed:
            logger.info("Consumer closed the stream; stopping run at %s",
                        run.last.stage if run.last else "start")
            return run.last
        except Exception as e:
            logger.warning("Pipeline failed: %s: %s", error_kind(e), e)
            try:
                return run.emit("complete", 100, error=friendly_message(e), error_kind=error_kind(e))
            except SinkClosed:
                return run.last

    def _analyze(self, config, image, run):
        if image is None:
            defaults = default_layout(config.text_prompt)
            if config.detected_sections:
                return LayoutAnalysis(config.detected_sections, defaults.nav_type, defaults.page_type)
        else:
            defaults = DEFAULT_LAYOUT

        try:
            run.ensure_open()
            reply = self._generate(
                build_analysis_directive("" if image is not None else config.text_prompt),
                image=image,
                timeout=run.timeout("analysis_timeout"),
                max_tokens=DEFAULTS["analysis_max_tokens"],
            )
        except SinkClosed:
            raise
        except Exception as e:
            logger.info("Layout analysis failed (%s); using defaults", error_kind(e))
            return defaults

        layout = parse_analysis(reply, defaults)
        if layout is None:
            logger.info("Layout analysis reply was not usable JSON; using defaults")
            return defaults
        return layout

    def _style(self, code, config, synthesizer, run):
        """Styling pass. Implausible replies keep the scaffold; errors propagate."""
        if looks_styled(code):
            logger.info("Scaffold already styled; skipping styling pass")
            return code

        run.ensure_open()
        reply = self._generate(
            build_styling_directive(code, config),
            image=None,
            timeout=run.timeout("styling_timeout"),
        )
        styled = strip_code_fences(reply)
        if len(styled) < len(code) / 2:
            logger.info("Styling reply too short (%d < %d/2); keeping scaffold", len(styled), len(code))
            return code
        if has_doctype(code) and not has_doctype(styled):
            logger.info("Styling reply lost the doctype; keeping scaffold")
            return code
        return synthesizer.normalize(styled)

    def edit(self, existing_code, command, stack="html"):
        """Apply one natural-language edit and return the new source.

        Raises ValidationError, or any collaborator error.
        """
        command = validate_edit_request(existing_code, command)
        synthesizer = get_synthesizer(stack or "html")
        reply = self._generate(
            build_edit_directive(existing_code, command, synthesizer.stack),
            image=None,
            timeout=DEFAULTS["edit_timeout"],
        )
        text = strip_code_fences(reply)
        if not text:
            raise CollaboratorUnavailable("The generation service returned an empty edit")
        return synthesizer.normalize(text)

    def write_files(self, files, output_dir):
        """Write generated files to disk."""
        if not output_dir:
            return []

        os.makedirs(output_dir, exist_ok=True)
        written = []
        for f in files:
            full_path = os.path.join(output_dir, f.path)
            resolved = os.path.realpath(full_path)
            if not resolved.startswith(os.path.realpath(output_dir) + os.sep):
                raise ValueError(f"Path escapes output directory: {f.path}")
            os.makedirs(os.path.dirname(resolved), exist_ok=True)
            with open(resolved, "w") as fp:
                fp.write(f.content)
            written.append(f.path)
        return written
