"""Claude API client used as the generation collaborator."""

import logging
import os
import re
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout

import anthropic

from config.defaults import DEFAULTS
from core.errors import (
    CollaboratorQuotaExceeded,
    CollaboratorTimeout,
    CollaboratorUnavailable,
    MissingCredential,
)
from utils.code_shapes import strip_code_fences

logger = logging.getLogger(__name__)

MODEL = DEFAULTS["model"]
MAX_TOKENS = DEFAULTS["max_tokens"]

_QUOTA_WORDING = re.compile(r"quota|rate.?limit|RESOURCE_EXHAUSTED", re.IGNORECASE)

# Calls run here so the caller can stop waiting when its timer fires.
_executor = ThreadPoolExecutor(
    max_workers=DEFAULTS["collaborator_workers"],
    thread_name_prefix="collaborator",
)


def get_client():
    """Return an Anthropic client. Raises if no API key is set."""
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        raise MissingCredential(
            "ANTHROPIC_API_KEY environment variable is not set. "
            "Get a key at https://console.anthropic.com/ and run:\n"
            "  export ANTHROPIC_API_KEY='your-key-here'"
        )
    return anthropic.Anthropic(api_key=api_key)


def build_content(prompt, image=None):
    """User message content: the image block first, then the directive."""
    if image is None:
        return prompt
    return [
        {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": image.mime_type,
                "data": image.data,
            },
        },
        {"type": "text", "text": prompt},
    ]


def _classify_api_error(exc):
    if isinstance(exc, anthropic.APITimeoutError):
        return CollaboratorTimeout(f"Generation timed out: {exc}")
    if isinstance(exc, anthropic.RateLimitError):
        return CollaboratorQuotaExceeded(str(exc) or "rate limit reached")
    status = getattr(exc, "status_code", None)
    if status == 429 or _QUOTA_WORDING.search(str(exc)):
        return CollaboratorQuotaExceeded(str(exc))
    return CollaboratorUnavailable(str(exc) or type(exc).__name__)


def _generate(client, prompt, image, max_tokens, timeout):
    text = ""
    try:
        # Use streaming to avoid SDK timeout for large max_tokens
        with client.messages.stream(
            model=MODEL,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": build_content(prompt, image)}],
            timeout=timeout,
        ) as stream:
            for chunk in stream.text_stream:
                text += chunk
            final = stream.get_final_message()
    except anthropic.APIError as e:
        raise _classify_api_error(e) from e

    if getattr(final, "stop_reason", None) == "max_tokens":
        logger.warning("Collaborator reply hit the token limit (%d chars)", len(text))
    return text


def invoke(prompt, image=None, timeout=None, max_tokens=None):
    """Send one directive (and optional image) and return the cleaned reply.

    The call is raced against ``timeout`` seconds; if the timer wins,
    CollaboratorTimeout is raised and the reply, if it ever arrives, is
    discarded.

    Raises:
        MissingCredential, CollaboratorTimeout, CollaboratorQuotaExceeded,
        CollaboratorUnavailable.
    """
    client = get_client()
    timeout = timeout or DEFAULTS["pipeline_timeout"]
    future = _executor.submit(
        _generate, client, prompt, image, max_tokens or MAX_TOKENS, timeout,
    )
    try:
        text = future.result(timeout=timeout)
    except FutureTimeout:
        future.cancel()
        raise CollaboratorTimeout(f"Generation timed out after {timeout:g}s") from None

    return strip_code_fences(text)
