"""Abstract base class for all stack synthesizers."""

import logging
from abc import ABC, abstractmethod

from config.stacks import STACKS
from core.errors import SynthesisDegraded
from core.state import GeneratedFile
from synthesizers.fallbacks import render_fallback
from synthesizers.prompts import build_scaffold_directive
from utils import llm
from utils.code_shapes import strip_code_fences

logger = logging.getLogger(__name__)


class Synthesizer(ABC):
    """Base class that every stack synthesizer must extend."""

    stack = "base"
    description = "Base synthesizer"

    @property
    def min_length(self):
        return STACKS[self.stack]["min_length"]

    @property
    def entry_file(self):
        return STACKS[self.stack]["entry_file"]

    @property
    def language(self):
        return STACKS[self.stack]["language"]

    def build_directive(self, config, sections, from_image=False):
        return build_scaffold_directive(config, sections, from_image)

    def synthesize_scaffold(self, config, sections, image=None, generate=None, timeout=None):
        """Ask the collaborator for the scaffold; fall back if the reply is implausible.

        Collaborator errors propagate. Only a short or empty reply is
        recovered here.
        """
        generate = generate or llm.invoke

        directive = self.build_directive(config, sections, from_image=image is not None)
        raw = generate(directive, image=image, timeout=timeout)
        try:
            return self.accept(raw)
        except SynthesisDegraded as e:
            logger.warning("[%s] %s; using fallback template", self.stack, e)
            return self.fallback(config, sections)

    def accept(self, raw):
        """Normalize a collaborator reply, or raise SynthesisDegraded."""
        text = strip_code_fences(raw or "")
        if len(text) < self.min_length:
            raise SynthesisDegraded(
                f"reply is {len(text)} chars, below the {self.min_length}-char minimum"
            )
        return self.normalize(text)

    def fallback(self, config, sections):
        return render_fallback(self.stack, config, sections)

    @abstractmethod
    def normalize(self, text):
        """Bring a plausible reply into the stack's canonical shape."""

    def package(self, code, config):
        """Files for the finished source: one primary file."""
        return (GeneratedFile(path=self.entry_file, content=code, language=self.language),)
