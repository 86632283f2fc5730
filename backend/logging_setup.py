# ===============================
# 📁 backend/logging_setup.py
# ===============================
import io
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class SafeFormatter(logging.Formatter):
    """Formatter that never crashes on emoji / non-ASCII author names"""

    def format(self, record):
        msg = super().format(record)
        try:
            enc = getattr(sys.stdout, "encoding", None) or "utf-8"
            msg = msg.encode(enc, errors="replace").decode(enc, errors="replace")
        except Exception:
            msg = msg.encode("ascii", errors="replace").decode("ascii", errors="replace")
        return msg


def _reconfigure_streams():
    try:
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8", errors="replace")
            sys.stderr.reconfigure(encoding="utf-8", errors="replace")
        elif hasattr(sys.stdout, "buffer"):
            sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
            sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")
    except (AttributeError, OSError, ValueError):
        # pytest capture and some WSGI servers hand us streams we can't touch
        pass


def init_logging(app_name="cosmic_garden", level="INFO", log_dir=None):
    """Initialize console logging, plus a rotating file when log_dir is given"""
    _reconfigure_streams()

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    fmt = SafeFormatter(LOG_FORMAT)

    if not any(getattr(h, "_cosmic_console", False) for h in root.handlers):
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(fmt)
        console._cosmic_console = True
        root.addHandler(console)

    log_path = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, f"{app_name}.log")
        if not any(getattr(h, "baseFilename", None) == os.path.abspath(log_path) for h in root.handlers):
            handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8")
            handler.setFormatter(fmt)
            root.addHandler(handler)

    # socketio/engineio are chatty at INFO
    logging.getLogger("engineio").setLevel(logging.WARNING)
    logging.getLogger("socketio").setLevel(logging.WARNING)

    logging.info("Logging initialized%s", f" at {log_path}" if log_path else "")
    return log_path
