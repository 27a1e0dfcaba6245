"""Error taxonomy shared by the client, the pipeline and the HTTP surface."""

import re


class SketchForgeError(Exception):
    """Base class for every error this project raises on purpose."""


class ValidationError(SketchForgeError):
    """Malformed or missing request fields. Raised before any stage runs."""


class CollaboratorError(SketchForgeError):
    """The generation service failed to produce a reply."""


class CollaboratorTimeout(CollaboratorError):
    pass


class CollaboratorQuotaExceeded(CollaboratorError):
    pass


class CollaboratorUnavailable(CollaboratorError):
    pass


class MissingCredential(CollaboratorError):
    pass


class SynthesisDegraded(SketchForgeError):
    """The collaborator answered but the answer is implausible.

    Internal only: synthesizers and the styling pass recover from it by
    falling back to a template or to the previous stage's source.
    """


_QUOTA_RE = re.compile(r"\b429\b|quota|rate.?limit|RESOURCE_EXHAUSTED", re.IGNORECASE)
_TIMEOUT_RE = re.compile(r"timed out|timeout", re.IGNORECASE)


def error_kind(exc):
    """Taxonomy tag kept alongside the user-facing message."""
    return type(exc).__name__


def friendly_message(exc):
    """Turn an exception into the message shown to the user."""
    message = str(exc) or error_kind(exc)

    if isinstance(exc, CollaboratorQuotaExceeded) or _QUOTA_RE.search(message):
        if "RESOURCE_EXHAUSTED" in message or "daily" in message.lower():
            return ("Daily generation quota exceeded. Wait until the quota resets "
                    "or use an API key with a higher limit.")
        return "Generation rate limit reached. Please wait a few minutes and try again."

    if isinstance(exc, CollaboratorTimeout) or _TIMEOUT_RE.search(message):
        return "Generation timed out. Try again, or simplify the sketch or prompt."

    if isinstance(exc, MissingCredential):
        return "The generation service is not configured (missing API key)."

    if isinstance(exc, CollaboratorUnavailable):
        return f"The generation service is unavailable: {message}"

    return message
