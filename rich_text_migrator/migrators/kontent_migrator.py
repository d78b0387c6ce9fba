"""
Kontent.ai Management API helpers for the HTML → rich text migration.

This module implements low-level interactions with the Management API
(v2).  Binary files are uploaded with ``POST /files/{file_name}`` and then
registered as assets with ``POST /assets``; content items are created
with ``POST /items`` and their rich text element is written with
``PUT /items/{id}/variants/codename/{language}``.  A simple rate limiter
keeps the client under the documented per-second limits and a generic
retry wrapper handles transient network errors and server-side rate
limiting responses (429 or 5xx).

The :class:`ManagementClient` exposes coroutines so that it can be used
from async transformers.  The blocking ``requests`` calls run in worker
threads; independent calls may therefore overlap, which the API allows.

Usage example::

    from rich_text_migrator.migrators.kontent_migrator import ManagementClient

    cfg = {"environment_id": ..., "api_key": ..., "base_url": "https://manage.kontent.ai/v2"}
    client = ManagementClient(cfg)
    file_id = await client.upload_bytes(data, "image/png", "pic.png")
    asset_id = await client.register_resource(file_id, title="pic.png", description="A picture")
    item_id = await client.create_record("My article", "rich_text")
    await client.upsert_record_variant(item_id, "default", "rich_text_element", markup)

"""

from __future__ import annotations

import asyncio
import threading
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from rich_text_migrator.models.kontent import AssetPayload, CodenameReference, ContentItemPayload, LanguageVariantPayload
from rich_text_migrator.utils.errors import MigrationError, RegistrationError, UploadError

DEFAULT_BASE_URL = "https://manage.kontent.ai/v2"

###############################################################################
# Rate limiting and retry utilities
###############################################################################

class RateLimiter:
    """
    Simple time-based rate limiter.  Ensures that no more than ``rpm``
    requests are dispatched per minute.  Calls coming from several worker
    threads are serialized so that concurrent uploads share one budget.
    """

    def __init__(self, rpm: int = 600) -> None:
        self.rpm = max(1, rpm)
        self.interval = 60.0 / float(self.rpm)
        self._last = 0.0
        self._lock = threading.Lock()

    def wait(self, time_fn: Callable[[], float] = time.time, sleep_fn: Callable[[float], None] = time.sleep) -> None:
        with self._lock:
            now = time_fn()
            dt = now - self._last
            if dt < self.interval:
                sleep_fn(self.interval - dt)
            self._last = time_fn()


def kontent_headers(cfg: Dict[str, str]) -> Dict[str, str]:
    """
    Construct the default headers required for Management API requests.

    :param cfg: A configuration dictionary with the ``api_key``.
    :return: A dictionary of headers including Authorization.
    """
    return {
        "Authorization": f"Bearer {cfg['api_key']}",
    }


def retry_after_seconds(value: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """
    Interpret a ``Retry-After`` header, which is either a number of
    seconds or an HTTP-date.

    :return: The delay in seconds (never negative), or ``None`` when the
        header is missing or cannot be parsed.
    """
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0.0, (when - now).total_seconds())


def with_retries(
    fn: Callable[[], requests.Response],
    *,
    max_attempts: int = 5,
    base_delay: float = 0.7,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> requests.Response:
    """
    Execute a function returning a ``requests.Response``, retrying on
    transient HTTP errors.  Retries are attempted on status codes 429
    (too many requests) and 5xx server errors.  Backoff is exponential.

    :param fn: A zero-argument callable that performs the HTTP request.
    :param max_attempts: Maximum number of attempts before giving up.
    :param base_delay: Base delay in seconds for exponential backoff.
    :return: The successful ``requests.Response``.
    :raises requests.RequestException: if all attempts fail.
    """
    attempt = 0
    while True:
        try:
            resp = fn()
            resp.raise_for_status()
            return resp
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status not in (429, 500, 502, 503, 504) or attempt >= max_attempts - 1:
                raise
            # Use Retry-After header if provided, otherwise exponential backoff
            wait = retry_after_seconds(e.response.headers.get("Retry-After"))
            if wait is None:
                wait = base_delay * (2 ** attempt)
            sleep_fn(wait)
            attempt += 1
        except requests.RequestException:
            if attempt >= max_attempts - 1:
                raise
            sleep_fn(base_delay * (2 ** attempt))
            attempt += 1


def _error_details(e: requests.RequestException) -> str:
    response = getattr(e, "response", None)
    if response is not None and response.text:
        return f"{e}: {response.text}"
    return str(e)


def _json_body(resp: requests.Response) -> Dict[str, Any]:
    # A body that is not a JSON object reads as empty
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


###############################################################################
# Management API client
###############################################################################

class ManagementClient:
    """
    Thin async wrapper around the Management API endpoints the migration
    needs.  ``cfg`` must provide ``environment_id`` and ``api_key``;
    ``base_url`` defaults to the public Management API.
    """

    def __init__(
        self,
        cfg: Dict[str, Any],
        *,
        limiter: Optional[RateLimiter] = None,
        timeout: float = 30,
        max_attempts: int = 5,
    ) -> None:
        self.cfg = cfg
        self.limiter = limiter or RateLimiter()
        self.timeout = timeout
        self.max_attempts = max_attempts
        base_url = (cfg.get("base_url") or DEFAULT_BASE_URL).rstrip("/")
        self.project_url = f"{base_url}/projects/{cfg['environment_id']}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        headers = {**kontent_headers(self.cfg), **kwargs.pop("headers", {})}

        def do_request() -> requests.Response:
            self.limiter.wait()
            return requests.request(
                method,
                f"{self.project_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )

        return with_retries(do_request, max_attempts=self.max_attempts)

    def _upload_bytes(self, data: bytes, content_type: str, filename: str) -> str:
        try:
            resp = self._request(
                "POST",
                f"/files/{quote(filename)}",
                headers={"Content-Type": content_type, "Content-Length": str(len(data))},
                data=data,
            )
        except requests.RequestException as e:
            raise UploadError(f"Failed to upload {filename}: {_error_details(e)}") from e
        file_id = _json_body(resp).get("id")
        if not file_id:
            raise UploadError(f"Upload of {filename} did not return a file reference")
        return file_id

    def _register_resource(self, payload: AssetPayload) -> str:
        try:
            resp = self._request("POST", "/assets", json=payload.to_payload())
        except requests.RequestException as e:
            raise RegistrationError(
                f"Failed to register file {payload.file_reference.id}: {_error_details(e)}"
            ) from e
        asset_id = _json_body(resp).get("id")
        if not asset_id:
            raise RegistrationError(f"Asset registration of {payload.file_reference.id} did not return an ID")
        return asset_id

    def _create_record(self, payload: ContentItemPayload) -> str:
        try:
            resp = self._request("POST", "/items", json=payload.to_payload())
        except requests.RequestException as e:
            raise MigrationError(f"Failed to create item '{payload.name}': {_error_details(e)}") from e
        item_id = _json_body(resp).get("id")
        if not item_id:
            raise MigrationError(f"Item creation for '{payload.name}' did not return an ID")
        return item_id

    def _upsert_record_variant(self, item_id: str, language_codename: str, payload: LanguageVariantPayload) -> Dict[str, Any]:
        path = f"/items/{item_id}/variants/codename/{language_codename}"
        try:
            resp = self._request("PUT", path, json=payload.to_payload())
        except requests.RequestException as e:
            raise MigrationError(f"Failed to upsert variant of item {item_id}: {_error_details(e)}") from e
        body = _json_body(resp)
        if not body:
            raise MigrationError(f"Variant upsert of item {item_id} did not return a variant")
        return body

    async def upload_bytes(self, data: bytes, content_type: str, filename: str) -> str:
        """Upload a binary file and return its file reference ID."""
        return await asyncio.to_thread(self._upload_bytes, data, content_type, filename)

    async def register_resource(
        self,
        file_id: str,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        language_codename: str = "default",
    ) -> str:
        """Create an asset around an uploaded file and return the asset ID."""
        try:
            payload = AssetPayload.for_file(
                file_id,
                title=title,
                description=description,
                language_codename=language_codename,
            )
        except ValidationError as e:
            raise RegistrationError(f"Invalid asset for file {file_id}: {e}") from e
        return await asyncio.to_thread(self._register_resource, payload)

    async def create_record(
        self,
        name: str,
        type_codename: str,
        *,
        codename: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> str:
        """Create a content item of type ``type_codename`` and return its ID."""
        try:
            payload = ContentItemPayload(
                name=name,
                type=CodenameReference(codename=type_codename),
                codename=codename,
                external_id=external_id,
            )
        except ValidationError as e:
            raise MigrationError(f"Invalid item '{name[:50]}': {e}") from e
        return await asyncio.to_thread(self._create_record, payload)

    async def upsert_record_variant(
        self,
        item_id: str,
        language_codename: str,
        element_codename: str,
        value: str,
    ) -> Dict[str, Any]:
        """Write ``value`` into the rich text element of the item's language variant."""
        payload = LanguageVariantPayload.rich_text(element_codename, value)
        return await asyncio.to_thread(self._upsert_record_variant, item_id, language_codename, payload)
