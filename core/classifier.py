"""Keyword-scoring page classifier for text prompts.

Picks a page kind from the prompt's vocabulary and maps it to a default
section set. Used only when a text run has no explicit sections.
"""

import re

from core.state import LayoutAnalysis

# Keywords that are prefix patterns (match word starts, e.g. "analytic" -> "analytics")
_PREFIX_KEYWORDS = {"analytic", "checkout", "subscri", "regist"}

KEYWORDS = {
    "dashboard": {
        "dashboard": 4, "admin": 3, "analytic": 3, "metrics": 3, "chart": 2,
        "kpi": 3, "report": 2, "table": 1, "overview": 1, "panel": 2, "crm": 3,
    },
    "ecommerce": {
        "shop": 4, "store": 3, "ecommerce": 4, "e-commerce": 4, "product": 3,
        "cart": 4, "checkout": 4, "catalog": 3, "order": 1, "buy": 2,
    },
    "blog": {
        "blog": 4, "article": 3, "post": 2, "news": 3, "magazine": 3,
        "author": 2, "journal": 2, "editorial": 2, "read": 1,
    },
    "auth": {
        "login": 4, "log in": 4, "signin": 4, "sign in": 4, "signup": 4,
        "sign up": 4, "regist": 3, "password": 3, "authentication": 4, "account": 1,
    },
    "pricing": {
        "pricing": 4, "price": 3, "plan": 2, "plans": 2, "subscri": 3,
        "tier": 3, "billing": 2, "per month": 2,
    },
}

SECTIONS = {
    "dashboard": ("nav", "stats", "cards", "content"),
    "ecommerce": ("nav", "hero", "cards", "cta", "footer"),
    "blog": ("nav", "hero", "content", "cards", "footer"),
    "auth": ("form",),
    "pricing": ("nav", "hero", "pricing", "faq", "footer"),
    "landing": ("nav", "hero", "features", "cta", "footer"),
}

NAV_TYPES = {"dashboard": "sidebar", "auth": "none"}

PAGE_TYPES = {"auth": "form"}


def classify(prompt):
    """Score a prompt against each page kind and return the best match.

    Returns (kind, scores_dict). Ties go to the kind listed first; a prompt
    that scores nothing is a landing page.
    """
    text = (prompt or "").lower()

    scores = {}
    for kind, kw_map in KEYWORDS.items():
        score = 0
        for keyword, weight in kw_map.items():
            if keyword in _PREFIX_KEYWORDS:
                pat = r'\b' + re.escape(keyword)
            else:
                pat = r'\b' + re.escape(keyword) + r'\b'
            if re.search(pat, text):
                score += weight
        scores[kind] = score

    best = max(scores, key=scores.get)
    if scores[best] == 0:
        best = "landing"
    return best, scores


def default_layout(prompt):
    """Layout a text run starts from before any analysis."""
    kind, _ = classify(prompt)
    return LayoutAnalysis(
        sections=SECTIONS[kind],
        nav_type=NAV_TYPES.get(kind, "topnav"),
        page_type=PAGE_TYPES.get(kind, kind),
    )
