from typing import Any

import httpx

from screensort.enrichment.exceptions import EnrichmentError


def request_json(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    context: str,
    **kwargs: object,
) -> dict[str, object]:
    """Send a request and decode a JSON object body.

    Raises:
        EnrichmentError: on transport errors, non-2xx statuses or a body that
            is not a JSON object.
    """
    try:
        response = client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise EnrichmentError(f"{context} request failed: {exc}") from exc
    raise_for_status(response, context)
    try:
        data = response.json()
    except ValueError as exc:
        raise EnrichmentError(f"{context} returned invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise EnrichmentError(f"{context} returned a non-object body")
    return data


def raise_for_status(response: httpx.Response, context: str) -> None:
    if response.is_success:
        return
    raise EnrichmentError(
        f"{context} failed with HTTP {response.status_code}: {response.text[:200]}"
    )


def object_list(data: dict[str, object], key: str) -> list[dict[str, Any]]:
    """Return the JSON objects listed under ``key``; anything else is skipped."""
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def nested_object(entry: dict[str, Any], key: str) -> dict[str, Any]:
    value = entry.get(key)
    return value if isinstance(value, dict) else {}
