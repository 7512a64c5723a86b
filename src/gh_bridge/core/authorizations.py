"""
OAuth token acquisition through the GitHub Authorizations API.
"""
from typing import Optional

import requests

from gh_bridge.config import get_settings
from gh_bridge.utils.logger import get_logger
from .exceptions import (
    APIError,
    AccessPermissionError,
    AuthenticationError,
    NotFoundError,
    TwoFactorRequiredError,
)

logger = get_logger(__name__)

OTP_HEADER = "X-GitHub-OTP"


def find_or_create_token(
    user: str,
    password: str,
    two_factor_code: Optional[str] = None
) -> str:
    """
    Find this application's authorization for a user, creating it if absent.

    Args:
        user: GitHub login
        password: Account password
        two_factor_code: One-time passcode, sent as the OTP header

    Returns:
        OAuth access token

    Raises:
        TwoFactorRequiredError: If the account needs a passcode
        AuthenticationError: If the credentials are rejected
        APIError: For any other failure
    """
    settings = get_settings().github
    url = f"{settings.api_base_url.rstrip('/')}/authorizations"

    with requests.Session() as session:
        session.auth = (user, password)
        session.headers["Accept"] = "application/vnd.github+json"
        if two_factor_code:
            session.headers[OTP_HEADER] = two_factor_code

        logger.debug(f"Listing authorizations for {user}")
        response = _send(session, "GET", url, timeout=settings.timeout)

        authorizations = _json(response, list)

        token = ""
        for authorization in authorizations:
            if isinstance(authorization, dict) and authorization.get("note_url") == settings.oauth_app_url:
                token = authorization.get("token") or ""
                break

        if token:
            logger.info(f"Reusing existing authorization for {user}")
            return token

        params = {
            "scopes": list(settings.oauth_scopes),
            "note": settings.oauth_note,
            "note_url": settings.oauth_app_url,
        }
        logger.info(f"Creating authorization '{settings.oauth_note}' for {user}")
        response = _send(session, "POST", url, json=params, timeout=settings.timeout)

        token = _json(response, dict).get("token")
        if not token:
            raise APIError("Authorization was created without a token", status_code=response.status_code)

        return token


def _send(session: requests.Session, method: str, url: str, **kwargs) -> requests.Response:
    """Issue one request and translate failures into our exceptions."""
    try:
        response = session.request(method, url, **kwargs)
    except requests.RequestException as e:
        raise APIError(f"Request to {url} failed: {e}") from e

    if response.ok:
        return response

    message = _error_message(response)
    otp = response.headers.get(OTP_HEADER, "")

    if response.status_code == 401 and otp.startswith("required"):
        # "required; sms" or "required; app"
        delivery = otp.partition(";")[2].strip() or None
        raise TwoFactorRequiredError(f"Two-factor authentication code required: {message}", delivery)
    if response.status_code == 401:
        raise AuthenticationError(f"Authentication failed: {message}")
    if response.status_code == 403:
        raise AccessPermissionError(f"Access denied: {message}")
    if response.status_code == 404:
        raise NotFoundError(f"Not found: {url}")

    raise APIError(f"Authorization request failed: {message}", status_code=response.status_code)


def _json(response: requests.Response, expected: type):
    """Decode a successful response body, which must be of the expected type."""
    try:
        data = response.json()
    except ValueError as e:
        raise APIError(
            f"Unexpected response from {response.url}: body is not JSON",
            status_code=response.status_code,
        ) from e

    if not isinstance(data, expected):
        raise APIError(
            f"Unexpected response from {response.url}: expected a JSON {expected.__name__}",
            status_code=response.status_code,
        )
    return data


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return response.reason or str(response.status_code)
