"""Palette and design-system data used by directives and fallback templates."""

MONOCHROME_ID = "bw"

# The only colors a monochrome run may use.
MONOCHROME_COLORS = [
    "#000000", "#FFFFFF", "#111111", "#222222", "#333333",
    "#666666", "#999999", "#CCCCCC", "#EEEEEE",
]

DEFAULT_COLORS = ["#000000", "#333333", "#666666", "#FFFFFF", "#F5F5F5"]

DESIGN_SYSTEM_COLORS = {
    "minimal": ["#F5F5F5", "#E0E0E0", "#333333", "#000000", "#FFFFFF"],
    "brutalist": ["#000000", "#333333", "#FF0000", "#FFFF00", "#FFFFFF"],
    "editorial": ["#1A1A2E", "#16213E", "#0F3460", "#E94560", "#FFFFFF"],
    "midnight": ["#0D1117", "#161B22", "#21262D", "#58A6FF", "#C9D1D9"],
    "highcontrast": ["#000000", "#FFFFFF", "#FF0000", "#00FF00", "#0000FF"],
}

DESIGN_SYSTEM_NOTES = {
    "minimal": "Minimal SaaS aesthetic: light backgrounds, soft borders, generous whitespace.",
    "brutalist": "Brutalist: hard edges, thick borders, bold oversized typography.",
    "editorial": "Editorial: serif headings over sans-serif body, strong typographic hierarchy.",
    "midnight": "Midnight: dark surfaces, muted text, a single bright accent.",
    "highcontrast": "High contrast: maximum separation between foreground and background.",
}

PALETTE_ROLES = ["Primary", "Secondary", "Tertiary", "Light", "Background"]

# Sections the layout analysis may report.
KNOWN_SECTIONS = (
    "nav", "hero", "features", "pricing", "testimonials", "cta", "form",
    "cards", "stats", "content", "gallery", "faq", "footer",
)

FEATURE_RULES = {
    "forms": "Form validation: inputs validate with visual feedback (red border on error, green on success).",
    "modals": "Modal dialogs: include a working modal that opens and closes.",
    "toasts": "Toast notifications: a toast helper shows success and error messages.",
    "loading": "Loading states: buttons show a loading label while busy.",
    "darkmode": "Dark mode toggle: a working dark/light switch.",
    "animations": "Scroll animations: elements fade in on scroll using IntersectionObserver.",
}
