"""Stack tag -> synthesizer lookup."""

from core.errors import ValidationError
from synthesizers.components import NextSynthesizer, ReactSynthesizer
from synthesizers.html import HtmlSynthesizer
from synthesizers.sfc import SvelteSynthesizer, VueSynthesizer

SYNTHESIZERS = {
    s.stack: s
    for s in (
        HtmlSynthesizer(),
        ReactSynthesizer(),
        NextSynthesizer(),
        VueSynthesizer(),
        SvelteSynthesizer(),
    )
}


def get_synthesizer(stack):
    try:
        return SYNTHESIZERS[stack]
    except KeyError:
        raise ValidationError(f"Unknown tech stack: {stack}") from None


def list_synthesizers():
    """Return a list of (stack, description) tuples."""
    return [(s.stack, s.description) for s in SYNTHESIZERS.values()]
