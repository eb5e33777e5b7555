"""
Slack Request Verification

Checks the X-Slack-Signature HMAC of an incoming request using slack_sdk's
SignatureVerifier (which also rejects timestamps older than five minutes).
"""

import logging
from typing import Mapping, Optional

from slack_sdk.signature import SignatureVerifier

from prbot.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TIMESTAMP_HEADER = "x-slack-request-timestamp"
SIGNATURE_HEADER = "x-slack-signature"


class SlackRequestVerifier:
    """Verifies that requests were signed with the app's signing secret."""

    def __init__(self, signing_secret: str):
        if not signing_secret:
            raise ConfigurationError("SLACK_SIGNING_SECRET is not configured")
        self.verifier = SignatureVerifier(signing_secret=signing_secret)

    def is_valid(
        self,
        body: bytes,
        timestamp: Optional[str],
        signature: Optional[str],
    ) -> bool:
        if not timestamp or not signature or not body:
            logger.warning("Slack request is missing signature headers or body")
            return False

        valid = self.verifier.is_valid(body=body, timestamp=timestamp, signature=signature)
        if not valid:
            logger.warning("Slack request signature verification failed")
        return valid

    def is_valid_request(self, body: bytes, headers: Mapping[str, str]) -> bool:
        """Verify using the raw body and the request headers."""
        return self.is_valid(
            body, headers.get(TIMESTAMP_HEADER), headers.get(SIGNATURE_HEADER)
        )
