"""
Slack Response Client

Delivers delayed slash command responses through the command's
response_url (slack_sdk WebhookClient), so the report can be posted after
the immediate acknowledgement.
"""

import asyncio
import logging
from typing import Any, Dict

from slack_sdk.webhook import WebhookClient

logger = logging.getLogger(__name__)


class SlackResponder:
    """Posts messages to slash command response URLs."""

    async def respond(
        self, response_url: str, message: Dict[str, Any], replace_original: bool = True
    ) -> bool:
        """
        Send a message to a response_url.

        Args:
            response_url: URL provided by Slack with the command
            message: Payload with blocks, text and response_type
            replace_original: Replace the loading message instead of adding one

        Returns:
            True if Slack accepted the message
        """
        if not response_url:
            logger.error("Cannot send delayed response: response_url is empty")
            return False

        webhook = WebhookClient(response_url)
        response = await asyncio.to_thread(
            webhook.send,
            text=message.get("text"),
            blocks=message.get("blocks"),
            response_type=message.get("response_type"),
            replace_original=replace_original,
        )

        if response.status_code != 200:
            logger.error(
                f"Error sending delayed response: {response.status_code} {response.body}"
            )
            return False

        logger.debug("Delayed response delivered")
        return True
