from __future__ import annotations

import os
import uuid
from datetime import datetime, timezone


def new_id() -> str:
    return str(uuid.uuid4())


def iso_from_timestamp(ts: float) -> str:
    # Same rendering as JavaScript Date.toISOString()
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return iso_from_timestamp(datetime.now(tz=timezone.utc).timestamp())


def birthtime_iso(st: os.stat_result) -> str:
    """Creation time where the platform reports one, inode change time otherwise."""
    ts = getattr(st, "st_birthtime", None)
    if ts is None:
        ts = st.st_ctime
    return iso_from_timestamp(ts)


def join_rel(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name
