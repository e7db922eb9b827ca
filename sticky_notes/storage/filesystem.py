from __future__ import annotations

import os
import tempfile
from datetime import datetime
from pathlib import Path

from sticky_notes.settings import RECOVERY_DIR


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """
    Replace `path` with `text` so readers see either the old or the new
    notes blob, never half of one. The temp file sits next to the target
    because os.replace is only atomic within a filesystem.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def write_recovery_copy(key: str, text: str, *, recovery_dir: Path = RECOVERY_DIR) -> Path:
    """
    Best-effort emergency save when the normal storage write fails.
    Writes a timestamped JSON snapshot into ~/.sticky-notes/recovery/.
    """
    stem = "".join(ch if ch.isalnum() or ch in "-_" else "-" for ch in key) or "notes"
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    recovery_path = Path(recovery_dir) / f"{stem}.recovery.{ts}.json"
    atomic_write_text(recovery_path, text, encoding="utf-8")
    return recovery_path
