from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from .config import AIRTABLE, BASEROW, DEFAULT_CATALOG_CONFIG, CatalogConfig
from .errors import (
    CatalogError,
    CatalogFetchError,
    CatalogNotConfiguredError,
    CatalogTimeoutError,
    CatalogUpstreamError,
)

logger = logging.getLogger(__name__)


def _raise_for_status(response: httpx.Response, backend: str) -> None:
    if response.is_success:
        return

    status = response.status_code
    try:
        details: Any = response.json()
    except ValueError:
        details = response.text[:100]
    logger.error("%s API error (HTTP %s): %s", backend, status, details)

    if status in (401, 403):
        message = f"Authorization failed. Check the {backend} credentials of the proxy."
    elif status == 404:
        message = f"Resource not found. Check the {backend} base and table configuration."
    else:
        message = f"{backend} request failed with status {status}."
    raise CatalogUpstreamError(message, status_code=status)


def _read_json(response: httpx.Response, backend: str) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise CatalogFetchError(f"{backend} returned a response that is not valid JSON.") from exc
    if not isinstance(payload, dict):
        raise CatalogFetchError(f"{backend} returned an unexpected payload.")
    return payload


def _get_page(
    http: httpx.Client,
    url: str,
    headers: dict[str, str],
    params: dict[str, Any] | None,
    deadline: float,
) -> httpx.Response:
    """GET one page, bounded by what is left of the whole fetch's time budget."""
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise httpx.TimeoutException("catalog fetch deadline exceeded before next page")
    response = http.get(url, headers=headers, params=params, timeout=remaining)
    if time.monotonic() > deadline:
        raise httpx.TimeoutException("catalog fetch deadline exceeded", request=response.request)
    return response


def _fetch_airtable(http: httpx.Client, config: CatalogConfig, deadline: float) -> list[dict[str, Any]]:
    url = f"{config.airtable_api_url}/{config.airtable_base_id}/{quote(config.airtable_table_name)}"
    headers = {"Authorization": f"Bearer {config.airtable_api_key}"}
    params: dict[str, Any] = {"pageSize": config.page_size}

    records: list[dict[str, Any]] = []
    for _ in range(config.max_pages):
        response = _get_page(http, url, headers, params, deadline)
        _raise_for_status(response, "Airtable")
        payload = _read_json(response, "Airtable")

        for record in payload.get("records") or []:
            fields = record.get("fields") if isinstance(record, dict) else None
            records.append(fields if isinstance(fields, dict) else {})

        offset = payload.get("offset")
        if not offset:
            break
        params["offset"] = offset
    else:
        logger.warning("Airtable pagination stopped after %d pages", config.max_pages)

    return records


def _fetch_baserow(http: httpx.Client, config: CatalogConfig, deadline: float) -> list[dict[str, Any]]:
    url: str | None = f"https://{config.baserow_host}/api/database/rows/table/{config.baserow_table_id}/"
    headers = {"Authorization": f"Token {config.baserow_token}"}
    params: dict[str, Any] | None = {"user_field_names": "true", "size": config.page_size}

    rows: list[dict[str, Any]] = []
    for _ in range(config.max_pages):
        response = _get_page(http, url, headers, params, deadline)
        _raise_for_status(response, "Baserow")
        payload = _read_json(response, "Baserow")

        rows.extend(row for row in payload.get("results") or [] if isinstance(row, dict))

        # "next" is an absolute URL that already carries the query string
        url = payload.get("next")
        params = None
        if not url:
            break
    else:
        logger.warning("Baserow pagination stopped after %d pages", config.max_pages)

    return rows


_FETCHERS = {
    AIRTABLE: _fetch_airtable,
    BASEROW: _fetch_baserow,
}


def fetch_catalog(
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
    client: httpx.Client | None = None,
) -> list[dict[str, Any]]:
    """
    Fetch every ski record from the configured backend.

    Returns the raw field mappings (attribute name -> value), one per record.
    The whole fetch, every page included, is bounded by ``config.timeout``.
    Raises a CatalogError subclass on any failure; nothing is retried.
    """
    fetcher = _FETCHERS.get(config.backend)
    if fetcher is None:
        raise CatalogNotConfiguredError(f"Unknown catalog backend: {config.backend!r}.")
    if not config.is_configured:
        logger.error("Catalog credentials for %s are not configured", config.backend)
        raise CatalogNotConfiguredError(
            f"{config.backend} credentials are not configured on the server."
        )

    http = client or httpx.Client(timeout=config.timeout)
    try:
        records = fetcher(http, config, time.monotonic() + config.timeout)
    except CatalogError:
        raise
    except httpx.TimeoutException as exc:
        logger.warning("Catalog request to %s timed out", config.backend, exc_info=True)
        raise CatalogTimeoutError(
            f"The {config.backend} request timed out after {config.timeout:g} seconds."
        ) from exc
    except httpx.RequestError as exc:
        logger.warning("Catalog request to %s failed", config.backend, exc_info=True)
        raise CatalogFetchError(
            f"Network error while contacting {config.backend}: {type(exc).__name__}."
        ) from exc
    finally:
        if client is None:
            http.close()

    logger.info("Fetched %d catalog records from %s", len(records), config.backend)
    return records
