"""Generic webhook provider.

Unlike the other providers, generic webhooks are delivered directly over
HTTP with a structured JSON payload instead of through the transport. The
transport URL is still built so configurations can be validated and
tested the same way as every other provider.
"""

import json
import logging
from datetime import datetime
from typing import Any
from urllib.parse import urlsplit

import httpx

from healarr_notify.exceptions import DeliveryError
from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import HTTPS_PREFIX, BaseProvider, encode_query

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "POST"
DEFAULT_CONTENT_TYPE = "application/json"
MAX_ERROR_BODY = 1024

# Event data keys copied verbatim into the payload "data" object
NUMERIC_FIELDS = ("healthy_files", "corrupt_files", "total_files", "retry_count", "max_retries")


def parse_key_value_lines(text: str) -> list[tuple[str, str]]:
    """Parse "key=value" lines, skipping blank lines and lines without "=".

    Args:
        text: Multi-line text

    Returns:
        List of (key, value) pairs split on the first "="
    """
    pairs = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        key, sep, value = line.partition("=")
        if sep:
            pairs.append((key, value))
    return pairs


class GenericWebhookProvider(BaseProvider):
    """Generic JSON webhook.

    Parameters:
        - webhook_url: Target URL (https:// assumed when no scheme)
        - method: HTTP method (default POST)
        - content_type: Content-Type header (default application/json)
        - template: Transport template name (optional)
        - message_key: JSON key for the message (default message)
        - title_key: JSON key for the title (default title)
        - custom_headers: "Header=value" lines
        - extra_data: "key=value" lines added to the payload data
    """

    provider_type = ProviderType.GENERIC

    @property
    def target_url(self) -> str:
        """Webhook URL with the scheme defaulted to https://."""
        url = self.require("webhook_url")
        if not url.startswith("http"):
            url = HTTPS_PREFIX + url
        return url

    @property
    def method(self) -> str:
        return self.get("method") or DEFAULT_METHOD

    @property
    def content_type(self) -> str:
        return self.get("content_type") or DEFAULT_CONTENT_TYPE

    def _transport_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        template = self.get("template")
        if template:
            params["template"] = template

        message_key = self.get("message_key")
        if message_key and message_key != "message":
            params["messageKey"] = message_key

        title_key = self.get("title_key")
        if title_key and title_key != "title":
            params["titleKey"] = title_key

        content_type = self.get("content_type")
        if content_type and content_type != DEFAULT_CONTENT_TYPE:
            params["contenttype"] = content_type

        method = self.get("method")
        if method and method != DEFAULT_METHOD:
            params["requestmethod"] = method

        for key, value in parse_key_value_lines(self.get("custom_headers")):
            params["@" + key] = value
        for key, value in parse_key_value_lines(self.get("extra_data")):
            params["$" + key] = value
        return params

    def build_url(self) -> str:
        target_url = self.target_url
        params = self._transport_params()
        if not params:
            return "generic+" + target_url

        parsed = urlsplit(target_url)
        host = parsed.netloc.rpartition("@")[2]
        return f"generic://{host}{parsed.path}?{encode_query(params)}"

    def build_payload(
        self,
        event_type: str,
        title: str,
        message: str,
        data: dict[str, Any],
        source: str,
        timestamp: datetime,
    ) -> dict[str, Any]:
        """Build the JSON payload for an event.

        Args:
            event_type: Triggering event type
            title: Short title
            message: Formatted message body
            data: Event data
            source: Value of the "source" field
            timestamp: Event timestamp (UTC)

        Returns:
            Payload dict; "data" is omitted when empty
        """
        structured: dict[str, Any] = {}

        file_path = data.get("file_path")
        if isinstance(file_path, str) and file_path:
            structured["file_path"] = file_path
            structured["file_name"] = file_path.rsplit("/", 1)[-1]

        for source_key, target_key in (
            ("corruption_type", "corruption_type"),
            ("path", "scan_path"),
            ("error", "error"),
        ):
            value = data.get(source_key)
            if isinstance(value, str) and value:
                structured[target_key] = value

        for key in NUMERIC_FIELDS:
            if key in data:
                structured[key] = data[key]

        for key, value in parse_key_value_lines(self.get("extra_data")):
            structured[key.strip()] = value.strip()

        payload: dict[str, Any] = {
            "title": title,
            "message": message,
            "event": event_type,
            "timestamp": timestamp.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "source": source,
        }
        if structured:
            payload["data"] = structured
        return payload

    def build_headers(self, user_agent: str) -> dict[str, str]:
        """Build request headers; custom headers override the defaults."""
        headers = {
            "Content-Type": self.content_type,
            "User-Agent": user_agent,
        }
        for key, value in parse_key_value_lines(self.get("custom_headers")):
            headers[key.strip()] = value.strip()
        return headers

    async def deliver(
        self,
        client: httpx.AsyncClient,
        payload: dict[str, Any],
        user_agent: str,
        timeout: float,
    ) -> None:
        """Send the payload to the webhook.

        Args:
            client: Shared HTTP client
            payload: JSON payload from build_payload()
            user_agent: User-Agent header value
            timeout: Request timeout in seconds

        Raises:
            DeliveryError: On transport failure or a status code >= 400
        """
        target_url = self.target_url
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")

        try:
            response = await client.request(
                self.method,
                target_url,
                content=body,
                headers=self.build_headers(user_agent),
                timeout=timeout,
            )
        except httpx.HTTPError as e:
            raise DeliveryError(f"request failed: {e}") from e

        if response.status_code >= 400:
            raise DeliveryError(
                f"webhook returned {response.status_code}: {response.text[:MAX_ERROR_BODY]}",
                status_code=response.status_code,
            )

        logger.debug(f"Generic webhook delivered (status: {response.status_code})")
