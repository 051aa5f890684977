"""Web UI routes for tcforge."""

import io
import logging
import math
from dataclasses import asdict
from pathlib import Path

from flask import Blueprint, Response, jsonify, render_template, request

from tcforge.engine import describe, prepare_output
from tcforge.errors import TimecodeFormatError, UnsupportedVersionError
from tcforge.manifest import ConvertConfig, default_output_path
from tcforge.timecode import decode, encode

logger = logging.getLogger(__name__)

bp = Blueprint("web", __name__, template_folder="templates")


@bp.errorhandler(TimecodeFormatError)
@bp.errorhandler(UnsupportedVersionError)
def bad_timecode(error):
    return jsonify({"error": str(error)}), 400


def _read_upload():
    """Decode the uploaded ``file`` field, or return an error response."""
    if "file" not in request.files:
        return None, (jsonify({"error": "No file provided"}), 400)

    f = request.files["file"]
    if not f.filename:
        return None, (jsonify({"error": "Empty filename"}), 400)

    try:
        frames = int(request.form.get("frames") or 0)
    except ValueError:
        return None, (jsonify({"error": "frames must be an integer"}), 400)

    text = f.read().decode("utf-8-sig", errors="replace")
    timecode = decode(io.StringIO(text)).with_total_frames(frames)
    return (f.filename, timecode), None


@bp.route("/")
def index():
    return render_template("index.html")


@bp.route("/api/info", methods=["POST"])
def info():
    upload, error = _read_upload()
    if error:
        return error
    filename, timecode = upload

    summary = asdict(describe(timecode))
    summary["version"] = timecode.version.value
    summary["filename"] = filename
    return jsonify(summary)


@bp.route("/api/convert", methods=["POST"])
def convert():
    upload, error = _read_upload()
    if error:
        return error
    filename, timecode = upload

    try:
        fps = float(request.form["fps"]) if request.form.get("fps") else None
    except ValueError:
        return jsonify({"error": "fps must be a number"}), 400
    if fps is not None and (not math.isfinite(fps) or fps <= 0):
        return jsonify({"error": "fps must be a positive finite number"}), 400
    config = ConvertConfig(
        version=request.form.get("version") or None,
        fps=fps,
        fix=request.form.get("fix", "").lower() in ("1", "true", "on", "yes"),
    )

    timecode, version = prepare_output(timecode, config)

    out = io.StringIO()
    encode(timecode, out, version=version, fps=fps)
    logger.info("Converted %s to %s (%d frames)", filename, version.value, timecode.total_frames)

    download_name = default_output_path(Path(filename), version.value).name
    return Response(
        out.getvalue(),
        mimetype="text/plain",
        headers={"Content-Disposition": f'attachment; filename="{download_name}"'},
    )
