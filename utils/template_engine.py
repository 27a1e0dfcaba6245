"""Template loader for the harness, fallback, router and project templates.

Templates are plain text under ``templates/<category>/``. Placeholders use
``string.Template`` syntax, so template bodies avoid a bare ``$``; values
substituted into them are inserted verbatim and never re-scanned.
"""

import os
from functools import lru_cache
from string import Template


def get_templates_dir():
    """Return the absolute path to the templates directory."""
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


@lru_cache(maxsize=None)
def load_template(category, template_name):
    """Load a template file and return its contents as a string."""
    templates_dir = get_templates_dir()
    path = os.path.join(templates_dir, category, template_name)
    resolved = os.path.realpath(path)
    if not resolved.startswith(os.path.realpath(templates_dir) + os.sep):
        raise ValueError(f"Template path escapes templates directory: {category}/{template_name}")
    with open(resolved, "r", encoding="utf-8") as f:
        return f.read()


def list_templates(category):
    """Relative paths of every template in a category, sorted."""
    root = os.path.join(get_templates_dir(), category)
    found = []
    for dirpath, _, filenames in os.walk(root):
        for name in filenames:
            found.append(os.path.relpath(os.path.join(dirpath, name), root))
    return sorted(p.replace(os.sep, "/") for p in found)


def render_template(category, template_name, variables=None):
    """Load and render a template with the given variables.

    Uses string.Template.safe_substitute: unknown placeholders are left
    as-is rather than raising errors.
    """
    return Template(load_template(category, template_name)).safe_substitute(variables or {})
