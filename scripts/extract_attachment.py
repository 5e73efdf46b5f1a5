"""Print what the chat client would attach for each given file.

Example::

    python scripts/extract_attachment.py notes.md logs.tar.gz paper.pdf

Each result is wrapped in a header naming the file, the same way the client
delimits attachments inside a message.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# allow running as a stand-alone script
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.config import LOG_LEVEL, MAX_ENTRY_BYTES, MAX_FILE_BYTES
from core.extractors import extract_attachment
from core.quota import Quota


def main() -> None:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("files", nargs="+", type=Path)
    ap.add_argument("--max-file-bytes", type=int, default=MAX_FILE_BYTES)
    ap.add_argument("--max-entry-bytes", type=int, default=MAX_ENTRY_BYTES)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    for path in args.files:
        path = path.resolve()
        quota = Quota(file_limit=args.max_file_bytes, entry_limit=args.max_entry_bytes)
        text = extract_attachment(str(path), path.name, quota=quota)
        print(f"--- {path.name} ---")
        print(text.rstrip("\n"))
        print()


if __name__ == "__main__":
    main()
