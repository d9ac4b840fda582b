"""Flask application factory for the riprocess HTTP API."""

from pathlib import Path

from flask import Flask, jsonify


def create_app(base_dir: Path | None = None) -> Flask:
    app = Flask(__name__)
    # Relative directories in posted manifests resolve against this.
    app.config["BASE_DIR"] = Path(base_dir) if base_dir else Path.cwd()
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024  # 1 MB

    from riprocess.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return jsonify({"error": "Manifest too large"}), 413

    return app
