from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from google.cloud.firestore_v1.base_query import FieldFilter

from .config import settings
from .db import get_client
from .models import (
    DEFAULT_AREA,
    DEFAULT_CATEGORY,
    DEFAULT_STATUS,
    DEFAULT_TITLE,
    VISIBLE_STATUSES,
    Item,
)

log = logging.getLogger(__name__)

COLLECTION = "lostItems"
MAX_ITEMS = 100

IMAGE_PREFIX = "lost-items/"
IMAGE_URL_TEMPLATE = "{base}/storage/v1/object/public/lost-items/{name}"


def utc_now_iso() -> str:
    return _iso(datetime.now(timezone.utc))


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_iso_timestamp(value: Any) -> str:
    # Firestore hands back DatetimeWithNanoseconds, a datetime subclass
    if isinstance(value, datetime):
        return _iso(value)
    return utc_now_iso()


def resolve_image_url(ref: str | None, base_url: str) -> str | None:
    if not ref:
        return None
    if "http" in ref:
        return ref
    name = ref.replace(IMAGE_PREFIX, "", 1)
    return IMAGE_URL_TEMPLATE.format(base=(base_url or "").rstrip("/"), name=name)


def normalize_document(doc_id: str, data: dict[str, Any], base_url: str = "") -> Item:
    return Item(
        id=doc_id,
        title=data.get("title") or DEFAULT_TITLE,
        description=data.get("description") or "",
        area=data.get("area") or DEFAULT_AREA,
        category=data.get("category") or DEFAULT_CATEGORY,
        status=data.get("status") or DEFAULT_STATUS,
        timestamp=to_iso_timestamp(data.get("timestamp")),
        image_url=resolve_image_url(data.get("imageUrl1"), base_url),
        facebook_link=data.get("facebookLink") or None,
    )


def collect_areas(items: Iterable[Item]) -> list[str]:
    return sorted({it.area for it in items if it.area})


def build_query(db):
    return (
        db.collection(COLLECTION)
        .where(filter=FieldFilter("status", "in", list(VISIBLE_STATUSES)))
        .order_by("timestamp", direction="DESCENDING")
        .limit(MAX_ITEMS)
    )


def fetch_items(db=None, base_url: str | None = None) -> tuple[list[Item], list[str]]:
    """Fetch visible items and their distinct areas.

    Any failure (credentials, network, query) is logged and yields empty
    lists so the build still publishes a valid page.
    """
    if base_url is None:
        base_url = settings.supabase_url

    log.info("Fetching items from Firestore collection %r", COLLECTION)
    try:
        if db is None:
            db = get_client()
        items = [
            normalize_document(doc.id, doc.to_dict() or {}, base_url)
            for doc in build_query(db).stream()
        ]
    except Exception as e:
        log.error("Error fetching from Firestore: %s: %s", type(e).__name__, e)
        return [], []

    areas = collect_areas(items)
    log.info("Found %d items in %d areas", len(items), len(areas))
    return items, areas
