from __future__ import annotations

from typing import Any

import httpx

from .models import AUTH, MALFORMED, NETWORK, TIMEOUT, ProviderFailure


def provider_error_message(response: httpx.Response) -> str:
    message = response.text.strip()
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict):
            msg = err.get("message")
            if isinstance(msg, str) and msg.strip():
                return msg.strip()
        if isinstance(err, str) and err.strip():
            return err.strip()
        msg = payload.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return message[:200] or f"HTTP {response.status_code}"


def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    timeout_seconds: float,
    headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Any:
    """POST ``payload`` and return the decoded body.

    Every way the call can go wrong is raised as a ``ProviderFailure`` with the
    matching failure kind. A body that is not JSON is returned as plain text.
    """
    timeout = httpx.Timeout(timeout_seconds, connect=min(8.0, timeout_seconds))
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.post(url, headers=headers, json=payload)
    except httpx.TimeoutException as exc:
        raise ProviderFailure(TIMEOUT, str(exc) or "request timed out") from exc
    except httpx.TransportError as exc:
        raise ProviderFailure(NETWORK, str(exc) or "connection failed") from exc
    except httpx.DecodingError as exc:
        raise ProviderFailure(MALFORMED, str(exc) or "undecodable response body") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise ProviderFailure(NETWORK, str(exc) or type(exc).__name__) from exc

    if response.status_code in {401, 403}:
        raise ProviderFailure(AUTH, provider_error_message(response))
    if response.status_code >= 400:
        raise ProviderFailure(NETWORK, f"HTTP {response.status_code}: {provider_error_message(response)}")

    try:
        return response.json()
    except ValueError:
        text = response.text.strip()
        if not text:
            raise ProviderFailure(MALFORMED, "empty response body") from None
        return text
