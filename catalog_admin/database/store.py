# catalog_admin/database/store.py
import asyncio
import json
import logging
from functools import partial
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp

from .exceptions import StoreError, NotFoundError, UploadError

# PostgREST answers single-object requests matching zero or many rows with this code
SINGLE_ROW_CODE = "PGRST116"
# A range starting past the last row; the total still comes back in Content-Range
RANGE_NOT_SATISFIABLE = 416
DEFAULT_TIMEOUT = 30


@dataclass
class SelectResult:
    rows: Any = field(default_factory=list)
    count: Optional[int] = None


def parse_content_range(header: Optional[str]) -> Optional[int]:
    """Total row count from a `Content-Range: 0-11/42` header"""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


def build_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Equality filters in PostgREST query syntax"""
    return {column: f"eq.{value}" for column, value in (filters or {}).items()}


class RemoteStore:
    """Client for the hosted table store and its object storage"""

    def __init__(self, url: str, key: str, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self.url = url.rstrip("/")
        self.key = key
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
        self.logger = logging.getLogger(__name__)

    async def connect(self):
        """Open the HTTP session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                headers={
                    "apikey": self.key,
                    "Authorization": f"Bearer {self.key}",
                },
                # Decimal prices and datetimes go out as strings
                json_serialize=partial(json.dumps, default=str),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            self.logger.info(f"Connected to remote store at {self.url}")

    async def close(self):
        """Close the HTTP session"""
        if self.session and not self.session.closed:
            await self.session.close()
            self.logger.info("Remote store connection closed")

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def select(self, table: str, columns: str = "*",
                     filters: Optional[Dict[str, Any]] = None,
                     order: Optional[str] = None, ascending: bool = True,
                     range_: Optional[Tuple[int, int]] = None,
                     count: bool = False, single: bool = False) -> SelectResult:
        """Read rows, optionally ordered, ranged and counted"""
        params = {"select": columns, **build_filters(filters)}
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"

        headers = {}
        if range_ is not None:
            start, end = range_
            headers["Range-Unit"] = "items"
            headers["Range"] = f"{start}-{end}"
        if count:
            headers["Prefer"] = "count=exact"
        if single:
            headers["Accept"] = "application/vnd.pgrst.object+json"

        body, response_headers = await self._request(
            "GET", f"/rest/v1/{table}", params=params, headers=headers,
            single=single, ranged=range_ is not None
        )
        if body is None and range_ is not None:
            body = []
        total = parse_content_range(response_headers.get("Content-Range")) if count else None
        return SelectResult(rows=body, count=total)

    async def insert(self, table: str, rows: Sequence[Dict[str, Any]],
                     returning: str = "*") -> List[Dict[str, Any]]:
        """Insert rows and return their stored representation"""
        body, _ = await self._request(
            "POST", f"/rest/v1/{table}",
            params={"select": returning},
            headers={"Prefer": "return=representation"},
            payload=list(rows)
        )
        return body or []

    async def update(self, table: str, patch: Dict[str, Any],
                     filters: Dict[str, Any],
                     returning: Optional[str] = None) -> Optional[List[Dict[str, Any]]]:
        """Patch matching rows; patched rows come back only when `returning` is given"""
        params = build_filters(filters)
        if returning:
            params["select"] = returning
            prefer = "return=representation"
        else:
            prefer = "return=minimal"

        body, _ = await self._request(
            "PATCH", f"/rest/v1/{table}", params=params,
            headers={"Prefer": prefer}, payload=patch
        )
        return body if returning else None

    async def delete(self, table: str, filters: Dict[str, Any]) -> None:
        """Delete matching rows"""
        await self._request(
            "DELETE", f"/rest/v1/{table}", params=build_filters(filters),
            headers={"Prefer": "return=minimal"}
        )

    async def upload_blob(self, bucket: str, key: str, data: bytes,
                          content_type: str = "application/octet-stream") -> None:
        """Store binary content under `bucket/key`"""
        try:
            await self._request(
                "POST", f"/storage/v1/object/{bucket}/{key}",
                headers={"Content-Type": content_type}, data=data
            )
        except StoreError as e:
            raise UploadError(e.message, code=e.code, details=e.details,
                              hint=e.hint, status=e.status) from e

    async def _request(self, method: str, path: str,
                       params: Optional[Dict[str, str]] = None,
                       headers: Optional[Dict[str, str]] = None,
                       payload: Any = None, data: Optional[bytes] = None,
                       single: bool = False, ranged: bool = False):
        if self.session is None or self.session.closed:
            await self.connect()

        url = f"{self.url}{path}"
        self.logger.debug(f"{method} {url} params={params}")
        try:
            async with self.session.request(
                method, url, params=params, headers=headers,
                json=payload, data=data
            ) as response:
                text = await response.text()
                if ranged and response.status == RANGE_NOT_SATISFIABLE:
                    self.logger.debug(f"Range past the end of {path}: {response.headers.get('Content-Range')}")
                    return None, response.headers
                if response.status >= 400:
                    raise self._error_from_response(response.status, text, single)
                body = json.loads(text) if text else None
                return body, response.headers
        except asyncio.TimeoutError as e:
            raise StoreError(f"Request to {path} timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise StoreError(str(e) or e.__class__.__name__) from e

    def _error_from_response(self, status: int, text: str, single: bool) -> StoreError:
        try:
            error = json.loads(text) if text else {}
        except ValueError:
            error = {}
        if not isinstance(error, dict):
            error = {}

        message = error.get("message") or error.get("error") or text or f"HTTP {status}"
        code = error.get("code")
        if code is None and error.get("statusCode") is not None:
            code = str(error["statusCode"])

        error_class = StoreError
        if code == SINGLE_ROW_CODE or (single and status == 406):
            error_class = NotFoundError

        return error_class(
            message, code=code, details=error.get("details"),
            hint=error.get("hint"), status=status
        )
