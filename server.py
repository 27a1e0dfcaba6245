#!/usr/bin/env python3
"""SketchForge - HTTP server: streaming generation, preview and edit."""

import logging
import os
import threading

from flask import Flask, Response, jsonify, request, stream_with_context

from config.stacks import STACKS
from core.errors import (
    CollaboratorTimeout,
    MissingCredential,
    ValidationError,
    friendly_message,
)
from core.orchestrator import Orchestrator
from core.preview import preview_document
from core.request import parse_generation_request
from core.stream import END_OF_STREAM, StageChannel, encode_stage
from synthesizers.scaffolding import project_files

logger = logging.getLogger(__name__)

app = Flask(__name__)
orchestrator = Orchestrator()


def _run_pipeline(config, image, channel):
    """Worker thread body: one run into one channel."""
    try:
        if image is not None:
            orchestrator.run_from_image(config, image, channel)
        else:
            orchestrator.run_from_text(config, channel)
    except Exception:
        logger.exception("Pipeline worker crashed")
    finally:
        channel.finish()


@app.route("/api/stacks")
def api_stacks():
    return jsonify([
        {"id": stack, "name": info["name"], "entry_file": info["entry_file"]}
        for stack, info in STACKS.items()
    ])


@app.route("/api/generate", methods=["POST"])
def api_generate():
    """Validate, then stream stage records as server-sent events."""
    try:
        config, image = parse_generation_request(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    channel = StageChannel()
    worker = threading.Thread(target=_run_pipeline, args=(config, image, channel), daemon=True)
    worker.start()

    def events():
        try:
            for stage in channel:
                yield encode_stage(stage)
            yield END_OF_STREAM
        finally:
            # Client gone or stream done: the run stops emitting
            channel.close()

    return Response(
        stream_with_context(events()),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@app.route("/api/preview", methods=["POST"])
def api_preview():
    data = request.get_json(silent=True) or {}
    stack = data.get("stack") or "html"
    if stack not in STACKS:
        return jsonify({"error": f"Unknown tech stack: {stack}"}), 400
    html = preview_document(data.get("code") or "", stack, data.get("pages") or ())
    return jsonify({"html": html})


@app.route("/api/edit", methods=["POST"])
def api_edit():
    data = request.get_json(silent=True) or {}
    stack = data.get("stack") or "html"
    try:
        code = orchestrator.edit(
            data.get("existing_code") or data.get("existingCode") or "",
            data.get("command") or "",
            stack,
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except CollaboratorTimeout as e:
        return jsonify({"error": friendly_message(e)}), 504
    except MissingCredential as e:
        return jsonify({"error": friendly_message(e)}), 503
    except Exception as e:
        logger.warning("Edit failed: %s", e)
        return jsonify({"error": friendly_message(e)}), 500
    return jsonify({"code": code})


@app.route("/api/export", methods=["POST"])
def api_export():
    """Finished source -> the stack's full project file set."""
    data = request.get_json(silent=True) or {}
    stack = data.get("stack") or "html"
    code = data.get("code") or ""
    if stack not in STACKS:
        return jsonify({"error": f"Unknown tech stack: {stack}"}), 400
    if not code.strip():
        return jsonify({"error": "Missing code"}), 400
    files = project_files(stack, code, data.get("title") or "Generated App")
    return jsonify({"files": [f.to_dict() for f in files]})


if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("SKETCHFORGE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = int(os.environ.get("PORT", 5001))
    print(f"SketchForge running at http://localhost:{port}")
    app.run(debug=False, port=port, threaded=True)
