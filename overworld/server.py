"""
project: Overworld
module: server.py
License: MIT

Server bootstrap: logging setup and the Flask development server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from overworld import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging and serve until interrupted.

    When the app was configured with WORLD_SAVE_PATH the world is written
    back there on shutdown.
    """
    app = create_app()
    _configure_logging(app.instance_path)
    try:
        logging.getLogger(__name__).info("Starting overworld server on %s:%s", host, port)
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
    finally:
        save_path = app.config.get("WORLD_SAVE_PATH")
        if save_path:
            app.extensions["overworld"].save(save_path)
    sys.exit(0)


def _configure_logging(log_dir: str):
    """Configure logging to both console and a rotating file in ``log_dir``.

    The file is ``overworld.log``; a few backups are kept to bound growth.
    Safe to call repeatedly.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "overworld.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
