# -*- coding: utf-8 -*-
# localhost only: the attachment endpoint reads local files
import logging

from app_unified import create_app
from core.config import LOG_LEVEL, PORT

if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    app = create_app()
    app.run(host="127.0.0.1", port=PORT, debug=False)
