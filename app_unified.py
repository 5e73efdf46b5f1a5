# -*- coding: utf-8 -*-
from flask import Flask, abort, jsonify, request

from api.routes import bp as attachments_bp   # /api/attachments*

def create_app() -> Flask:
    app = Flask(__name__)

    # --------------------------- Blueprint Registration ---------------------------
    app.register_blueprint(attachments_bp, url_prefix="/api")

    # --------------------------- Access Control ---------------------------
    @app.before_request
    def _only_local():
        """Attachments read arbitrary local paths, so only this machine may ask."""
        ra = (request.remote_addr or "")
        if ra not in ("127.0.0.1", "::1"):
            abort(403)
        return None

    # --------------------------- Health ---------------------------
    @app.get("/healthz")
    def health():
        return jsonify({"ok": True})

    return app
