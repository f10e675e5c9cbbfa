"""Response error extraction for load test observability.

AgriGo errors share one shape: ``{"message": ..., "error": ..., **details}``.
Request-schema failures add a ``details`` list of pydantic errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Compact error description for Locust failure messages and log lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    message = body.get("message") or body.get("error") or str(body)[:300]
    details = body.get("details")
    if isinstance(details, list):
        fields = ", ".join(".".join(str(p) for p in err.get("loc", [])) for err in details)
        return f"{message} ({fields})"
    return str(message)


def is_insufficient_stock(response: Response) -> bool:
    try:
        return response.status_code == 400 and response.json().get("error") == "InsufficientStock"
    except ValueError:
        return False
