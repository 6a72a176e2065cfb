"""Lost & Found static snapshot builder.

Run once per invocation (a scheduled CI job, hourly):
  python build_snapshot.py [--output-dir dist]

It will:
  1) Fetch approved and resolved items from Firestore (lostItems)
  2) Render a static page into <output-dir>/index.html
  3) Export the same items into <output-dir>/data.json

A failed fetch still publishes an empty page. Any other failure exits 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from lostfound.config import settings
from lostfound.fetch import fetch_items, to_iso_timestamp
from lostfound.output import build_snapshot_data, write_artifacts
from lostfound.render import render_index


ROOT = Path(__file__).resolve().parent
DIST_DIR = ROOT / "dist"

log = logging.getLogger("lostfound.build")


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="[snapshot] %(levelname)s %(name)s: %(message)s",
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the static Lost & Found snapshot")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(settings.output_dir) if settings.output_dir else DIST_DIR,
        help="Output directory for index.html and data.json (default: dist/)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _configure_logging()
    log.info("Starting snapshot build...")

    build_id = settings.build_id
    started = datetime.now(timezone.utc)

    try:
        items, areas = fetch_items()

        html = render_index(items, areas, build_id=build_id, generated_at=started)
        snapshot = build_snapshot_data(
            items,
            areas,
            timestamp=to_iso_timestamp(started),
            build_id=build_id,
        )
        html_path, _ = write_artifacts(args.output_dir, html, snapshot)
    except Exception:
        log.exception("Build failed")
        return 1

    log.info("Build completed")
    log.info("Output: %s", html_path)
    log.info("Items: %d, areas: %d", len(items), len(areas))
    log.info("Build ID: %s", build_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
