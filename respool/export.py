"""Export a parsed string pool as JSON.

  <output>/
    metadata.json   - Pool summary
    strings.json    - Index -> raw text (null when undecodable)
    styled.json     - Index -> tagged text, styled strings only
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .pool import StringPool

log = logging.getLogger(__name__)


def export_pool(pool: StringPool, output_dir: Path, *, html: bool = True) -> dict[str, Any]:
    """Write *pool* to *output_dir*.

    Returns an index mapping each export kind to the file written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Any] = {}

    meta_path = output_dir / "metadata.json"
    _write_json(meta_path, pool.summary())
    written["metadata"] = meta_path.name

    strings = {str(i): text for i, text in pool.iter_strings()}
    strings_path = output_dir / "strings.json"
    _write_json(strings_path, strings)
    written["strings"] = strings_path.name

    if html:
        styled: dict[str, str] = {}
        for i in range(pool.count()):
            if not pool.styles(i):
                continue
            rendered = pool.html(i)
            if rendered is not None:
                styled[str(i)] = rendered
        styled_path = output_dir / "styled.json"
        _write_json(styled_path, styled)
        written["styled"] = styled_path.name
        log.debug("Rendered %d styled strings", len(styled))

    log.info("Export complete: %s", output_dir)
    return written


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
