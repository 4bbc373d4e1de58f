import logging
import os
import subprocess
import sys

from . import config
from .errors import PreviewError

log = logging.getLogger(config.LOGGER_NAME)


def open_file(path: str) -> None:
    """Open ``path`` in the system's default application."""
    if sys.platform == "darwin":
        command = ["open", path]
    elif sys.platform.startswith("linux"):
        command = ["xdg-open", path]
    elif sys.platform == "win32":
        try:
            os.startfile(path)
        except OSError as e:
            raise PreviewError(str(e)) from e
        return
    else:
        raise PreviewError(f"Unsupported platform: {sys.platform}")

    log.info(f"Opening viewer: {' '.join(command)}")
    try:
        subprocess.Popen(command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as e:
        raise PreviewError(f"Failed to execute command '{' '.join(command)}': {e}") from e
