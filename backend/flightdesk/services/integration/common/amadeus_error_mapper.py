from typing import Any, Optional

from flightdesk.services.integration.common.errors import ProviderError


def status_category(status_code: int) -> str:
    if status_code == 401:
        return ProviderError.AUTHENTICATION
    if status_code == 404:
        return ProviderError.NOT_FOUND
    if status_code == 429:
        return ProviderError.RATE_LIMITED
    if status_code >= 500:
        return ProviderError.SERVER_ERROR
    return ProviderError.CLIENT_ERROR


def map_amadeus_error(status_code: int, body: Any) -> ProviderError:
    """
    Turns an Amadeus error response into a ProviderError.

    Amadeus error bodies look like:
        {"errors": [{"status": 400, "code": 477, "title": "INVALID FORMAT",
                     "detail": "currencyCode must be ...", "source": {...}}]}
    """
    code: Optional[str] = None
    message = f"Provider returned HTTP {status_code}"

    errors = body.get("errors") if isinstance(body, dict) else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        first = errors[0]
        if first.get("code") is not None:
            code = str(first["code"])

        detail = first.get("detail") or first.get("title")
        if detail:
            message = str(detail)

        parameter = first.get("source", {}).get("parameter") if isinstance(first.get("source"), dict) else None
        if parameter:
            message = f"{message} (parameter: {parameter})"

    elif isinstance(body, dict) and body.get("error_description"):
        # OAuth2 token endpoint error shape
        message = str(body["error_description"])
        code = body.get("error")

    return ProviderError(
        status_category=status_category(status_code),
        message=message,
        status_code=status_code,
        code=code,
    )
