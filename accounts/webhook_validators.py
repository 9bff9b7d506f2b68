"""
Signature verification for identity provider webhooks (Svix signing scheme).
"""

import base64
import binascii
import hashlib
import hmac
import logging
import time
from typing import ClassVar

from accounts.exceptions import WebhookVerificationError


logger = logging.getLogger(__name__)

SECRET_PREFIX = "whsec_"
SIGNATURE_VERSION = "v1"


class SvixWebhookValidator:
    """
    Validates `svix-id`, `svix-timestamp` and `svix-signature` headers.

    The signature is a base64 HMAC-SHA256 of `{id}.{timestamp}.{body}` keyed with
    the base64 decoded secret. `svix-signature` may carry several space separated
    `v1,<signature>` entries; any match is accepted.
    """

    REQUIRED_HEADERS: ClassVar[list[str]] = ["svix-id", "svix-timestamp", "svix-signature"]

    def __init__(self, secret: str, tolerance_seconds: int = 300):
        self.secret = secret or ""
        self.tolerance_seconds = int(tolerance_seconds)

    def _get_key(self) -> bytes:
        secret = self.secret
        if secret.startswith(SECRET_PREFIX):
            secret = secret[len(SECRET_PREFIX) :]
        if not secret:
            logger.error("Identity provider webhook secret is not configured")
            raise WebhookVerificationError("Webhook secret is not configured.")
        try:
            return base64.b64decode(secret)
        except (binascii.Error, ValueError) as e:
            logger.error("Identity provider webhook secret is not valid base64")
            raise WebhookVerificationError("Webhook secret is not configured.") from e

    def sign(self, message_id: str, timestamp: int | str, body: bytes) -> str:
        to_sign = f"{message_id}.{timestamp}.".encode() + body
        digest = hmac.new(self._get_key(), to_sign, hashlib.sha256).digest()
        return base64.b64encode(digest).decode()

    def validate(self, headers, body: bytes, now: float | None = None) -> bool:
        """
        Validate webhook headers and signature.

        Args:
            headers: HTTP headers from the webhook request
            body: Raw request body
            now: current unix time, defaults to `time.time()`

        Returns:
            True if validation passes

        Raises:
            WebhookVerificationError: If validation fails
        """
        normalized_headers = {k.lower(): v for k, v in headers.items()}
        for header in self.REQUIRED_HEADERS:
            if not normalized_headers.get(header):
                logger.warning("Identity webhook missing required header: %s", header)
                raise WebhookVerificationError(f"Missing webhook header: {header}")

        try:
            timestamp = int(normalized_headers["svix-timestamp"])
        except ValueError as e:
            raise WebhookVerificationError("Invalid webhook timestamp.") from e

        now = time.time() if now is None else now
        if abs(now - timestamp) > self.tolerance_seconds:
            logger.warning("Identity webhook timestamp %s outside tolerance", timestamp)
            raise WebhookVerificationError("Webhook timestamp is too old or too new.")

        expected = self.sign(normalized_headers["svix-id"], timestamp, body)
        for entry in normalized_headers["svix-signature"].split():
            version, _, signature = entry.partition(",")
            if version == SIGNATURE_VERSION and hmac.compare_digest(signature, expected):
                logger.debug("Identity webhook validation successful")
                return True

        logger.warning("Identity webhook signature mismatch for %s", normalized_headers["svix-id"])
        raise WebhookVerificationError()
