from flask import Blueprint, request, jsonify
from pathlib import Path
import logging

from core.extractors import attachment_record

log = logging.getLogger(__name__)

bp = Blueprint("attachments", __name__)

# -------------------- file picker filter --------------------
SUPPORTED_EXTENSIONS = [
    "txt", "md", "json", "csv", "xml", "html", "py", "js", "ts", "c", "cpp", "java",
    "go", "rs", "sql", "log", "yml", "yaml",
    "pdf", "zip", "jar", "epub", "tar", "tgz", "gz", "bz2", "xz", "rar", "7z",
    "jsonl", "ndjson", "tsv",
]

@bp.get("/attachments/extensions")
def supported_extensions():
    return jsonify({
        "ok": True,
        "filters": [
            {"name": "Supported", "extensions": SUPPORTED_EXTENSIONS},
            {"name": "All Files", "extensions": ["*"]},
        ],
    })

# -------------------- attach --------------------
@bp.post("/attachments")
def read_attachments():
    """One pipeline call per selected path, in order; the response mirrors the selection."""
    data = request.get_json(silent=True) or {}
    paths = data.get("paths")
    if not isinstance(paths, list) or not all(isinstance(p, str) and p for p in paths):
        return jsonify({"ok": False, "error": "paths must be a list of file paths"}), 400
    for p in paths:
        if not Path(p).is_absolute():
            return jsonify({"ok": False, "error": f"not an absolute path: {p}"}), 400

    files = [attachment_record(p) for p in paths]
    log.info("Read %d attachment(s)", len(files))
    return jsonify({"ok": True, "files": files})
