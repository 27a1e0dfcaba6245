"""Folder naming utilities: slug generation, per-stack dirs, dedup."""

import os
import re

from config.stacks import STACKS

BASE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "output")

MAX_DEDUP = 1000


def slugify(text):
    """Convert text to a filesystem-safe slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", "_", text)
    return text.strip("_")


def extract_project_name(description):
    """Pull a short project name from a text prompt or page name."""
    filler = {
        "build", "me", "a", "an", "the", "create", "make", "generate", "design",
        "write", "for", "to", "with", "using", "that", "and", "app", "ui",
        "page", "website", "site", "please", "can", "you", "i", "want",
        "need", "some", "new", "of", "in", "my", "our",
    }
    words = re.sub(r"[^\w\s]", "", (description or "").lower()).split()
    meaningful = [w for w in words if w not in filler]
    name = "_".join(meaningful[:3]) if meaningful else "project"
    return slugify(name) or "project"


def _check_containment(path, base_dir):
    """Verify the resolved path stays within base_dir."""
    root = os.path.realpath(base_dir)
    resolved = os.path.realpath(path)
    if os.path.commonpath([root, resolved]) != root or resolved == root:
        raise ValueError(f"Output path escapes {base_dir}: {path}")
    return resolved


def get_output_dir(stack, description, base_dir=None):
    """Return a deduplicated output directory for a stack and prompt."""
    base_dir = base_dir or BASE_DIR
    stack_dir = STACKS.get(stack, {}).get("output_dir", "projects")
    project_name = extract_project_name(description)
    base = os.path.join(base_dir, stack_dir, project_name)
    _check_containment(base, base_dir)

    candidates = [base] + [f"{base}_{n}" for n in range(2, MAX_DEDUP + 2)]
    free = next((c for c in candidates if not os.path.exists(c)), None)
    if free is None:
        raise RuntimeError(f"{project_name}: more than {MAX_DEDUP} exported projects share this name")
    return free
