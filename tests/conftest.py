"""
Shared fixtures: an in-memory stand-in for the remote table store.
"""

import copy
import itertools
from typing import Any, Dict, List, Optional

import pytest

from catalog_admin.database.exceptions import NotFoundError
from catalog_admin.database.store import SelectResult


class FakeStore:
    """Implements the RemoteStore interface over Python lists"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {"categories": [], "products": []}
        self.blobs: Dict[str, bytes] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[str, Exception] = {}
        self._ids = itertools.count(1000)

    def fail(self, method: str, error: Exception):
        self.failures[method] = error

    def seed(self, table: str, *rows: Dict[str, Any]):
        for row in rows:
            self.tables[table].append(dict(row))

    def _check(self, method: str, *args):
        self.calls.append((method,) + args)
        if method in self.failures:
            raise self.failures[method]

    def _matches(self, row, filters):
        return all(str(row.get(k)) == str(v) for k, v in (filters or {}).items())

    def _project(self, table, row, columns):
        row = copy.deepcopy(row)
        if table == "products" and columns and "category:categories" in columns:
            category = next(
                (c for c in self.tables["categories"] if c["id"] == row.get("category_id")), None
            )
            row["category"] = {"id": category["id"], "name": category["name"]} if category else None
        return row

    async def select(self, table, columns="*", filters=None, order=None, ascending=True,
                     range_=None, count=False, single=False):
        self._check("select", table, columns, filters, order, range_)
        rows = [r for r in self.tables[table] if self._matches(r, filters)]
        if order:
            rows.sort(key=lambda r: r[order], reverse=not ascending)
        total = len(rows)
        if range_ is not None:
            start, end = range_
            rows = rows[start:end + 1]
        rows = [self._project(table, r, columns) for r in rows]
        if single:
            if len(rows) != 1:
                raise NotFoundError("JSON object requested, multiple (or no) rows returned",
                                    code="PGRST116", status=406)
            return SelectResult(rows=rows[0], count=total if count else None)
        return SelectResult(rows=rows, count=total if count else None)

    async def insert(self, table, rows, returning="*"):
        self._check("insert", table, rows)
        created = []
        for row in rows:
            stored = dict(row, id=next(self._ids))
            self.tables[table].append(stored)
            created.append(self._project(table, stored, returning))
        return created

    async def update(self, table, patch, filters, returning: Optional[str] = None):
        self._check("update", table, patch, filters)
        updated = []
        for row in self.tables[table]:
            if self._matches(row, filters):
                row.update(patch)
                updated.append(self._project(table, row, returning))
        return updated if returning else None

    async def delete(self, table, filters):
        self._check("delete", table, filters)
        self.tables[table] = [r for r in self.tables[table] if not self._matches(r, filters)]

    async def upload_blob(self, bucket, key, data, content_type="application/octet-stream"):
        self._check("upload_blob", bucket, key, content_type)
        self.blobs[f"{bucket}/{key}"] = data


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def seeded_store(store):
    store.seed(
        "categories",
        {"id": 101, "name": "Books", "description": "Paper and e-books"},
        {"id": 102, "name": "Audio", "description": None},
    )
    store.seed(
        "products",
        *[
            {"id": 200 + i, "title": f"Item {i:02d}", "price": "9.90", "stock": i,
             "category_id": 101 if i % 2 else 102, "image_url": None}
            for i in range(1, 27)
        ]
    )
    return store
