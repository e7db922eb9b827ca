from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def blocked_signals(obj):
    """
    Temporarily silence Qt signals of obj and always switch them back on.
    """
    if obj is None:
        yield
        return
    try:
        obj.blockSignals(True)
        yield
    finally:
        try:
            obj.blockSignals(False)
        except Exception:
            # the object may already be destroyed by Qt
            pass
