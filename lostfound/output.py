from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from .models import Item

HTML_NAME = "index.html"
JSON_NAME = "data.json"


def build_snapshot_data(
    items: Sequence[Item],
    areas: Sequence[str],
    *,
    timestamp: str,
    build_id: str,
) -> dict[str, Any]:
    return {
        "timestamp": timestamp,
        "buildId": build_id,
        "items": [it.to_dict() for it in items],
        "areas": list(areas),
    }


def write_artifacts(out_dir: Path, html: str, snapshot: dict[str, Any]) -> tuple[Path, Path]:
    """Write index.html and data.json into out_dir, creating it if needed."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    html_path = out_dir / HTML_NAME
    json_path = out_dir / JSON_NAME

    html_path.write_text(html, encoding="utf-8")
    json_path.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    return html_path, json_path
