"""HTTP routes for riprocess."""

import logging
from pathlib import Path

from flask import Blueprint, Response, current_app, jsonify, request

from riprocess.emit import format_pairs
from riprocess.engine import assemble
from riprocess.errors import RiprocessError
from riprocess.manifest import parse_manifest

logger = logging.getLogger(__name__)

bp = Blueprint("api", __name__)


@bp.route("/api/health")
def health():
    return jsonify({"status": "ok"})


@bp.route("/api/image-list", methods=["POST"])
def image_list():
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({"error": "Request body must be a JSON manifest"}), 400

    base_dir = Path(current_app.config["BASE_DIR"]).resolve()
    try:
        manifest = parse_manifest(data, base_dir=base_dir, expand_user=False)
        for key, directory in (("image_dir", manifest.image_dir), ("timestamp_dir", manifest.timestamp_dir)):
            if not directory.resolve().is_relative_to(base_dir):
                return jsonify({"error": f"{key} must be inside the server's base directory"}), 400
        result = assemble(manifest)
        text = format_pairs(result.pairs)
    except RiprocessError as e:
        logger.info("image-list request failed: %s", e)
        return jsonify({"error": str(e)}), 400

    return Response(text, mimetype="text/plain")
