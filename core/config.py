# -*- coding: utf-8 -*-
from pathlib import Path
try:
    import tomllib  # py3.11+
except Exception:
    import tomli as tomllib

def load_config():
    root = Path(__file__).resolve().parents[1]
    cfg_path = root / "config.toml"
    if not cfg_path.exists():
        cfg_path = root / "config_example.toml"
    if not cfg_path.exists():
        return {}
    with open(cfg_path, "rb") as f:
        return tomllib.load(f)

CFG = load_config()
PORT = int(CFG.get("port", 5005))
LOG_LEVEL = str(CFG.get("logging", {}).get("level", "INFO")).upper()

INGEST = CFG.get("ingest", {})
MAX_FILE_BYTES = int(INGEST.get("max_file_bytes", 2 * 1024 * 1024))
MAX_ENTRY_BYTES = int(INGEST.get("max_entry_bytes", 512 * 1024))

_TIMEOUTS = INGEST.get("timeouts", {})
PDFTOTEXT_TIMEOUT = float(_TIMEOUTS.get("pdftotext", 15))
PDF_PARSER_TIMEOUT = float(_TIMEOUTS.get("pdf_parser", 30))
ARCHIVE_TIMEOUT = float(_TIMEOUTS.get("archive", 20))
