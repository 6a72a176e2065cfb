from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lostfound.models import Item


class FakeDoc:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return self._data


class FakeQuery:
    """Records the Firestore query chain and streams canned documents."""

    def __init__(self, docs, calls, error=None):
        self._docs = docs
        self.calls = calls
        self._error = error

    def where(self, *args, **kwargs):
        self.calls.append(("where", args, kwargs))
        return self

    def order_by(self, *args, **kwargs):
        self.calls.append(("order_by", args, kwargs))
        return self

    def limit(self, count):
        self.calls.append(("limit", (count,), {}))
        return self

    def stream(self):
        if self._error is not None:
            raise self._error
        return iter(self._docs)


class FakeClient:
    def __init__(self, docs=(), error=None):
        self.calls = []
        self._docs = [FakeDoc(i, d) for i, d in docs]
        self._error = error

    def collection(self, name):
        self.calls.append(("collection", (name,), {}))
        return FakeQuery(self._docs, self.calls, self._error)


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def make_item():
    def _make(item_id: str = "a1", **kwargs) -> Item:
        kwargs.setdefault("timestamp", "2024-03-05T12:00:00.000Z")
        return Item(id=item_id, **kwargs)

    return _make


@pytest.fixture
def build_time():
    return datetime(2026, 10, 18, 11, 30, tzinfo=timezone.utc)
