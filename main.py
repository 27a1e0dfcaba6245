#!/usr/bin/env python3
"""SketchForge - sketch or text prompt to UI code.

Usage:
    python main.py generate --prompt "a pricing page for a note app" --stack react
    python main.py generate --image sketch.png --stack html --out page.html
    python main.py generate --prompt "..." --stack vue --export       # full project
    python main.py preview src/App.vue --stack vue -o preview.html
    python main.py edit index.html --command "make the hero darker"
    python main.py stacks
"""

import argparse
import base64
import logging
import mimetypes
import os
import sys

from config.design import DESIGN_SYSTEM_COLORS, MONOCHROME_COLORS, MONOCHROME_ID
from config.stacks import STACKS
from core.errors import SketchForgeError, ValidationError, friendly_message
from core.orchestrator import Orchestrator
from core.preview import preview_document
from core.request import parse_generation_request
from core.stream import ListSink
from synthesizers.registry import list_synthesizers
from synthesizers.scaffolding import project_files
from utils.folder_naming import extract_project_name, get_output_dir


def _palette(value):
    """--palette: "bw", a design-system id, or comma-separated hex colors."""
    if not value:
        return None
    if value == MONOCHROME_ID:
        return {"id": MONOCHROME_ID, "name": "Monochrome", "colors": MONOCHROME_COLORS[:5]}
    if value in DESIGN_SYSTEM_COLORS:
        return {"id": value, "name": value.title(), "colors": DESIGN_SYSTEM_COLORS[value]}
    colors = [c.strip() for c in value.split(",") if c.strip()]
    return {"id": "custom", "name": "Custom", "colors": colors}


def _read_image(path):
    with open(path, "rb") as f:
        data = base64.b64encode(f.read()).decode("ascii")
    mime_type = mimetypes.guess_type(path)[0] or "image/png"
    return data, mime_type


class PrintSink(ListSink):
    """ListSink that also prints each stage transition."""

    def emit(self, stage):
        super().emit(stage)
        if stage.error:
            print(f"  [{stage.progress:3d}%] {stage.stage}: FAILED")
        else:
            print(f"  [{stage.progress:3d}%] {stage.stage}")


def cmd_generate(args):
    config = {"tech_stack": args.stack, "interaction_level": args.interaction}
    palette = _palette(args.palette)
    if palette:
        config["color_palette"] = palette
    if args.design:
        config["design_system"] = args.design
    if args.pages:
        config["pages"] = [{"name": name.strip()} for name in args.pages.split(",") if name.strip()]

    body = {"config": config}
    if args.image:
        body["image_base64"], body["mime_type"] = _read_image(args.image)
    else:
        config["text_prompt"] = args.prompt

    config, image = parse_generation_request(body)
    orchestrator = Orchestrator()
    sink = PrintSink()

    print(f"Stack:    {STACKS[args.stack]['name']}")
    if image is not None:
        final = orchestrator.run_from_image(config, image, sink)
    else:
        final = orchestrator.run_from_text(config, sink)

    if final is None or final.error:
        print(f"\nError: {final.error if final else 'generation did not finish'}")
        sys.exit(1)

    # The packaged entry file carries stack additions the raw code lacks.
    code = final.files[0].content if final.files else final.code
    description = args.prompt or os.path.splitext(os.path.basename(args.image))[0]
    if args.export:
        files = project_files(args.stack, code, extract_project_name(description).replace("_", " ").title())
        output_dir = args.out or get_output_dir(args.stack, description)
        written = orchestrator.write_files(files, output_dir)
        print(f"\nOutput:   {output_dir}")
        print(f"\nGenerated {len(written)} file(s):")
        for path in written:
            print(f"  {path}")
        return

    if args.out:
        with open(args.out, "w") as f:
            f.write(code)
        print(f"\nWrote {args.out}")
    else:
        print()
        print(code)


def cmd_preview(args):
    with open(args.file) as f:
        source = f.read()
    html = preview_document(source, args.stack)
    if args.output:
        with open(args.output, "w") as f:
            f.write(html)
        print(f"Wrote {args.output}")
    else:
        print(html)


def cmd_edit(args):
    with open(args.file) as f:
        source = f.read()
    code = Orchestrator().edit(source, args.command, args.stack)
    with open(args.output or args.file, "w") as f:
        f.write(code)
    print(f"Updated {args.output or args.file}")


def cmd_stacks(args):
    print("Available stacks:")
    for stack, description in list_synthesizers():
        print(f"  {stack:8s} - {description}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="sketchforge",
        description="Turn a sketch or a text prompt into UI code",
    )
    subparsers = parser.add_subparsers(dest="command")

    gen = subparsers.add_parser("generate", help="Run the generation pipeline")
    source = gen.add_mutually_exclusive_group(required=True)
    source.add_argument("--prompt", help="Text description of the UI")
    source.add_argument("--image", help="Path to a sketch or screenshot")
    gen.add_argument("--stack", choices=list(STACKS), default="html",
                     help="Output stack (default: html)")
    gen.add_argument("--palette", help='"bw", a design-system id, or comma-separated hex colors')
    gen.add_argument("--design", choices=list(DESIGN_SYSTEM_COLORS),
                     help="Design system (default: minimal)")
    gen.add_argument("--interaction", choices=["static", "micro", "full"], default="micro",
                     help="Interaction level (default: micro)")
    gen.add_argument("--pages", help="Comma-separated page names for a multi-page run")
    gen.add_argument("--out", help="Output file, or directory with --export")
    gen.add_argument("--export", action="store_true",
                     help="Write a full project instead of a single file")

    preview = subparsers.add_parser("preview", help="Compile a source file into a preview document")
    preview.add_argument("file")
    preview.add_argument("--stack", choices=list(STACKS), required=True)
    preview.add_argument("-o", "--output", help="Write the document here instead of stdout")

    edit = subparsers.add_parser("edit", help="Apply a natural-language edit to a source file")
    edit.add_argument("file")
    edit.add_argument("--command", required=True, help="What to change")
    edit.add_argument("--stack", choices=list(STACKS), default="html")
    edit.add_argument("-o", "--output", help="Write here instead of overwriting FILE")

    subparsers.add_parser("stacks", help="List available stacks")
    return parser


COMMANDS = {
    "generate": cmd_generate,
    "preview": cmd_preview,
    "edit": cmd_edit,
    "stacks": cmd_stacks,
}


def main(argv=None):
    logging.basicConfig(
        level=os.environ.get("SKETCHFORGE_LOG_LEVEL", "INFO").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in COMMANDS:
        parser.print_help()
        sys.exit(1)

    try:
        COMMANDS[args.command](args)
    except ValidationError as e:
        print(f"Invalid request: {e}")
        sys.exit(2)
    except SketchForgeError as e:
        print(f"Error: {friendly_message(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
