"""Client for the OneSignal push notification REST API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

import httpx

from marketplace.config import get_settings
from marketplace.domain.errors import DispatchFailed

logger = logging.getLogger(__name__)


@dataclass
class PushResponse:
    """Relevant fields of a successful provider response."""

    id: str | None = None
    recipients: int | None = None
    errors: Any = None
    invalid_player_ids: list[str] = field(default_factory=list)


class PushClient(Protocol):
    """Anything able to deliver one push payload to a list of subscriber ids."""

    def send(
        self,
        player_ids: Sequence[str],
        *,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> PushResponse: ...


def _extract_error_details(body: Any) -> str | None:
    """Return a human readable description for a provider error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(item) for item in errors)
        if isinstance(errors, dict) and errors:
            return "; ".join(f"{key}: {value}" for key, value in errors.items())
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _parse_invalid_player_ids(errors: Any) -> list[str]:
    if isinstance(errors, dict):
        invalid = errors.get("invalid_player_ids") or []
        return [str(player_id) for player_id in invalid]
    return []


class OneSignalClient:
    """Send push notifications through the OneSignal ``notifications`` endpoint.

    A single request is issued per call; there is no retry. Transport errors
    and non-2xx answers are raised as :class:`DispatchFailed`.
    """

    def __init__(
        self,
        *,
        app_id: str,
        api_key: str,
        api_url: str,
        timeout: float = 5.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.app_id = app_id
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._http_client = http_client

    def build_payload(
        self,
        player_ids: Sequence[str],
        *,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        return {
            "app_id": self.app_id,
            "include_player_ids": list(player_ids),
            "headings": {"en": title},
            "contents": {"en": body},
            "data": dict(data or {}),
        }

    def send(
        self,
        player_ids: Sequence[str],
        *,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> PushResponse:
        payload = self.build_payload(player_ids, title=title, body=body, data=data)
        headers = {
            "Authorization": f"Basic {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = self._post(payload, headers)
        except httpx.TimeoutException as exc:
            logger.error("Push provider timed out after %ss", self.timeout)
            raise DispatchFailed("Push provider request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Push provider request failed: %s", exc)
            raise DispatchFailed(f"Push provider request failed: {exc}") from exc

        content = _decode_body(response)
        if not response.is_success:
            details = _extract_error_details(content)
            if details:
                logger.error(
                    "Push provider responded with status %s: %s",
                    response.status_code,
                    details,
                )
            else:
                logger.error("Push provider responded with status %s", response.status_code)
            raise DispatchFailed(
                f"Push provider responded with status {response.status_code}",
                status_code=response.status_code,
                payload=content,
            )

        if not isinstance(content, dict):
            content = {}
        errors = content.get("errors")
        if errors:
            logger.warning(
                "Push provider accepted the request with errors: %s",
                _extract_error_details({"errors": errors}),
            )
        recipients = content.get("recipients")
        return PushResponse(
            id=content.get("id"),
            recipients=recipients if isinstance(recipients, int) else None,
            errors=errors,
            invalid_player_ids=_parse_invalid_player_ids(errors),
        )

    def _post(self, payload: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return self._http_client.post(
                self.api_url, json=payload, headers=headers, timeout=self.timeout
            )
        with httpx.Client(timeout=httpx.Timeout(self.timeout)) as client:
            return client.post(self.api_url, json=payload, headers=headers)


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def get_push_client() -> OneSignalClient | None:
    """Return a configured push client, or ``None`` when push is disabled."""

    settings = get_settings()
    if not settings.push_enabled:
        logger.info("OneSignal configuration incomplete; push delivery disabled")
        return None
    return OneSignalClient(
        app_id=settings.onesignal_app_id,
        api_key=settings.onesignal_rest_api_key,
        api_url=settings.onesignal_api_url,
        timeout=settings.push_timeout_seconds,
    )


__all__ = ["OneSignalClient", "PushClient", "PushResponse", "get_push_client"]
