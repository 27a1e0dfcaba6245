"""Default pipeline settings."""

import os

DEFAULTS = {
    "model": os.environ.get("SKETCHFORGE_MODEL", "claude-sonnet-4-5-20250929"),
    "max_tokens": 16384,
    "analysis_max_tokens": 1024,
    # Seconds. The run budget caps every sub-call below it.
    "pipeline_timeout": 120,
    "analysis_timeout": 30,
    "scaffold_timeout": 120,
    "styling_timeout": 90,
    "edit_timeout": 55,
    "collaborator_workers": 8,
    # Styling pass
    "styling_input_budget": 12000,
    "styling_skip_min_length": 3000,
    "styling_skip_markers": ["gradient", "rounded", "shadow", "hover:"],
    # Inbound request limits
    "min_prompt_chars": 10,
    "min_image_chars": 100,
    "edit_min_command": 3,
    "edit_max_command": 1000,
    "edit_max_code": 50000,
    # Sandbox mock interaction
    "mock_delay_ms": 800,
    "saved_revert_ms": 1500,
    "toast_ms": 2500,
}
