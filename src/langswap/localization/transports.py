"""Transports fetching language documents.

All transports implement the Transport protocol and raise TransportError
on failure.

Components:
    MemoryTransport - Documents held in a dict (bundled packs, tests)
    FileTransport   - JSON documents read from disk with path-traversal guard
    HttpTransport   - JSON documents fetched with httpx.AsyncClient

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote, urlparse

import httpx

from langswap.constants import DEFAULT_HTTP_TIMEOUT, MAX_DOCUMENT_SIZE
from langswap.diagnostics import Diagnostic, DiagnosticCode, TransportError

if TYPE_CHECKING:
    from langswap.localization.types import Document

__all__ = ["FileTransport", "HttpTransport", "MemoryTransport"]

logger = logging.getLogger(__name__)


def _transport_error(code: DiagnosticCode, message: str, url: str) -> TransportError:
    return TransportError(Diagnostic(code=code, message=message, location=url), url=url)


def _decode(raw: str | bytes, url: str) -> Document:
    try:
        document = json.loads(raw)
    except ValueError as e:
        raise _transport_error(
            DiagnosticCode.DOCUMENT_DECODE_FAILED, f"Invalid JSON: {e}", url
        ) from e
    if not isinstance(document, Mapping):
        raise _transport_error(
            DiagnosticCode.DOCUMENT_DECODE_FAILED,
            f"Language document must be a JSON object, got {type(document).__name__}",
            url,
        )
    return document


class MemoryTransport:
    """Transport serving documents from a mapping of location -> document.

    Example:
        >>> transport = MemoryTransport({"packs/fa.json": {"direction": "rtl"}})
    """

    __slots__ = ("_documents", "requests")

    def __init__(self, documents: Mapping[str, Document] | None = None) -> None:
        self._documents: dict[str, Document] = dict(documents or {})
        self.requests: list[str] = []

    def add(self, url: str, document: Document) -> None:
        """Serve document at url."""
        self._documents[url] = document

    async def fetch(self, url: str) -> Document:
        self.requests.append(url)
        try:
            return self._documents[url]
        except KeyError:
            raise _transport_error(
                DiagnosticCode.DOCUMENT_NOT_FOUND, f"No document at '{url}'", url
            ) from None


class FileTransport:
    """Transport reading JSON documents from the file system.

    Accepts plain paths and file:// URLs. Relative paths are resolved
    against root_dir, and every resolved path must stay inside root_dir.

    Example:
        >>> config = LanguageConfig(base_location="locales")
        >>> transport = FileTransport(".")
        # activate("fa") reads ./locales/fa.json

    Attributes:
        root_dir: Directory all documents must live under
    """

    __slots__ = ("_resolved_root", "root_dir")

    def __init__(self, root_dir: str | Path = ".") -> None:
        self.root_dir = Path(root_dir)
        self._resolved_root = self.root_dir.resolve()

    def _resolve(self, url: str) -> Path:
        parsed = urlparse(url)
        raw_path = unquote(parsed.path) if parsed.scheme == "file" else url
        full_path = (self._resolved_root / raw_path).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            raise _transport_error(
                DiagnosticCode.UNSAFE_LOCATION,
                f"Path traversal detected: '{url}' escapes {self._resolved_root}",
                url,
            ) from None
        return full_path

    def _read(self, url: str) -> Document:
        path = self._resolve(url)
        try:
            size = path.stat().st_size
            if size > MAX_DOCUMENT_SIZE:
                raise _transport_error(
                    DiagnosticCode.DOCUMENT_TOO_LARGE,
                    f"Document is {size} bytes, limit is {MAX_DOCUMENT_SIZE}",
                    url,
                )
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise _transport_error(
                DiagnosticCode.DOCUMENT_NOT_FOUND, f"No document at '{path}'", url
            ) from e
        except OSError as e:
            raise _transport_error(DiagnosticCode.FETCH_FAILED, str(e), url) from e
        return _decode(raw, url)

    async def fetch(self, url: str) -> Document:
        return await asyncio.to_thread(self._read, url)


class HttpTransport:
    """Transport fetching JSON documents over HTTP(S) with httpx.

    A client passed in is reused and left open; otherwise a short-lived
    AsyncClient is created per fetch.

    Example:
        >>> async with httpx.AsyncClient(base_url="https://cdn.example.com") as client:
        ...     switcher = LanguageSwitcher(config, HttpTransport(client))
    """

    __slots__ = ("_client", "_headers", "_timeout")

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            client: Shared AsyncClient (connection pooling, base_url, auth)
            timeout: Request timeout in seconds
            headers: Extra request headers
        """
        self._client = client
        self._timeout = timeout
        self._headers: dict[str, Any] = {"Accept": "application/json", **(headers or {})}

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        return await client.get(url, headers=self._headers, timeout=self._timeout)

    async def fetch(self, url: str) -> Document:
        try:
            if self._client is not None:
                response = await self._get(self._client, url)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._get(client, url)
        except httpx.HTTPError as e:
            raise _transport_error(DiagnosticCode.FETCH_FAILED, str(e), url) from e

        if not response.is_success:
            raise _transport_error(
                DiagnosticCode.HTTP_STATUS,
                f"HTTP {response.status_code} fetching language document",
                url,
            )
        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return _decode(response.content, url)
