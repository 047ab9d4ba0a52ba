"""
Persistent storage for the user's section selection.

This module manages the file:

    data/selected_sessions.json

The course listing and price list are read-only inputs; this file stores
only which sessions the user checked, so the selection survives reloading
the catalog. Ids that no longer match a section are simply ignored.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Mapping

from coursecart import config


def load_selection(path: str | Path | None = None) -> Dict[str, bool]:
    """
    Load the selection as {session_id: True}.

    Returns an empty selection if the file does not exist or is invalid.
    """
    selected_path = Path(path) if path is not None else config.selection_path()

    # First run: nothing selected yet
    if not selected_path.exists():
        return {}

    try:
        data = json.loads(selected_path.read_text(encoding="utf-8"))
        ids = data.get("selected_session_ids", [])
        if not isinstance(ids, list):
            return {}
        out: Dict[str, bool] = {}
        for x in ids:
            if isinstance(x, (str, int)) and not isinstance(x, bool):
                sid = str(x).strip()
                if sid:
                    out[sid] = True
        return out
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return {}


def save_selection(selection: Mapping[str, bool], path: str | Path | None = None) -> None:
    """
    Save the checked session ids. Unchecked entries are not written.
    """
    selected_path = Path(path) if path is not None else config.selection_path()
    selected_path.parent.mkdir(parents=True, exist_ok=True)

    ids = sorted({str(sid).strip() for sid, on in selection.items() if on and str(sid).strip()})
    payload = {"selected_session_ids": ids}

    selected_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
