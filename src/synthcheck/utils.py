import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


def format_elapsed(seconds):
    """Return compact HH:MM:SS elapsed display."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def local_timestamp():
    """Return the local wall-clock time, second precision, for start/finish lines."""
    return datetime.now().replace(microsecond=0).strftime("%a %b %d %H:%M:%S %Y")


def _json_default(obj):
    """JSON serializer fallback for Enum and Path."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Path):
        return str(obj)
    return str(obj)


class DebugDump:
    """
    Best-effort debug snapshot file.

    Opened once on entry when enabled and closed on exit. Failing to open or
    write the file never interrupts a run; the dump is simply lost.
    """

    def __init__(self, path, enabled=True):
        self.path = Path(path)
        self.enabled = enabled
        self._fh = None

    def __enter__(self):
        if self.enabled:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._fh = open(self.path, "w", encoding="utf-8")
            except OSError as exc:
                logger.debug("[*] Debug dump disabled, cannot open %s: %s", self.path, exc)
                self._fh = None
        return self

    @property
    def active(self):
        return self._fh is not None

    def write(self, label, payload):
        if self._fh is None:
            return
        try:
            self._fh.write(f"# {label}\n")
            self._fh.write(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False, default=_json_default))
            self._fh.write("\n")
            self._fh.flush()
        except OSError as exc:
            logger.debug("[*] Debug dump write to %s failed: %s", self.path, exc)

    def close(self):
        if self._fh is None:
            return
        try:
            self._fh.close()
        except OSError as exc:
            logger.debug("[*] Closing debug dump %s failed: %s", self.path, exc)
        self._fh = None

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
