from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional

APPROVED = "APPROVED"
RESOLVED = "RESOLVED"
VISIBLE_STATUSES = (APPROVED, RESOLVED)

CATEGORIES = (
    "ELECTRONICS",
    "CLOTHING",
    "DOCUMENTS",
    "KEYS",
    "WALLET",
    "JEWELRY",
    "BAG",
    "OTHER",
)

CATEGORY_LABELS = MappingProxyType({
    "ELECTRONICS": "Elektroniikka",
    "CLOTHING": "Vaatteet",
    "DOCUMENTS": "Asiakirjat",
    "KEYS": "Avaimet",
    "WALLET": "Lompakko",
    "JEWELRY": "Koru",
    "BAG": "Laukku",
    "OTHER": "Muu",
})

STATUS_LABELS = MappingProxyType({
    APPROVED: "Avoin",
    RESOLVED: "Ratkaistu",
})

DEFAULT_TITLE = "Ei nimeä"
DEFAULT_AREA = "Tuntematon"
DEFAULT_CATEGORY = "OTHER"
DEFAULT_STATUS = APPROVED


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category) or category


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status) or status


@dataclass(frozen=True)
class Item:
    id: str
    title: str = DEFAULT_TITLE
    description: str = ""
    area: str = DEFAULT_AREA
    category: str = DEFAULT_CATEGORY  # unknown values pass through
    status: str = DEFAULT_STATUS  # APPROVED|RESOLVED
    timestamp: str = ""
    image_url: Optional[str] = None
    facebook_link: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """JSON shape used by data.json (camelCase keys)."""
        return {
            "id": self.id,
            "title": self.title,
            "area": self.area,
            "category": self.category,
            "status": self.status,
            "description": self.description,
            "imageUrl": self.image_url,
            "timestamp": self.timestamp,
            "facebookLink": self.facebook_link,
        }
