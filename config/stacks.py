"""Stack definitions: one entry per supported output format."""

STACKS = {
    "html": {
        "name": "HTML + Tailwind",
        "kind": "markup",
        "entry_file": "index.html",
        "language": "html",
        "min_length": 500,
        "output_dir": "html_pages",
    },
    "react": {
        "name": "React (Vite)",
        "kind": "jsx",
        "entry_file": "src/App.tsx",
        "language": "typescript",
        "min_length": 200,
        "output_dir": "react_apps",
    },
    "nextjs": {
        "name": "Next.js App Router",
        "kind": "jsx",
        "entry_file": "app/page.tsx",
        "language": "typescript",
        "min_length": 200,
        "output_dir": "nextjs_apps",
    },
    "vue": {
        "name": "Vue 3 SFC",
        "kind": "sfc",
        "entry_file": "src/App.vue",
        "language": "vue",
        "min_length": 200,
        "output_dir": "vue_apps",
    },
    "svelte": {
        "name": "Svelte",
        "kind": "sfc",
        "entry_file": "src/App.svelte",
        "language": "svelte",
        "min_length": 200,
        "output_dir": "svelte_apps",
    },
}

INTERACTION_LEVELS = ("static", "micro", "full")

NAV_TYPES = ("topnav", "sidebar", "bottomnav", "none")
