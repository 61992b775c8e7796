"""
SQS client for the change events queue.

Sends batches of change events. Receiving is done by the Lambda SQS event
source mapping, which invokes the embedding consumer with delivered batches.

Dependencies: boto3
System role: Queue Gateway (send side)
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from semantic_search.core.exceptions import QueueSendError
from semantic_search.core.models import QueueMessage

logger = logging.getLogger(__name__)

SQS_MAX_BATCH_ENTRIES = 10


class SQSQueueClient:
    """Send message batches to one SQS queue."""

    def __init__(
        self,
        queue_url: str,
        region: str | None = None,
        max_batch_entries: int = SQS_MAX_BATCH_ENTRIES,
        client: Any | None = None,
    ) -> None:
        """
        Initialize SQS client for the destination queue.

        Args:
            queue_url: Destination queue URL
            region: AWS region (boto3 default chain if None)
            max_batch_entries: Maximum entries per SendMessageBatch call
            client: Pre-built boto3 SQS client (mainly for tests)

        Raises:
            ValueError: When queue_url is empty
        """
        if not queue_url:
            raise ValueError("queue_url cannot be empty")

        self._queue_url = queue_url
        self._max_batch_entries = min(max_batch_entries, SQS_MAX_BATCH_ENTRIES)
        self._client = client or boto3.client("sqs", region_name=region)

    def send_batch(self, entries: list[QueueMessage]) -> int:
        """
        Send one batch of messages.

        Args:
            entries: Messages with ids unique within the batch

        Returns:
            int: Number of messages accepted by SQS

        Raises:
            ValueError: Too many entries or duplicate ids
            QueueSendError: The call failed or SQS rejected any entry
        """
        if not entries:
            return 0
        if len(entries) > self._max_batch_entries:
            raise ValueError(
                f"Batch of {len(entries)} exceeds the limit of {self._max_batch_entries} entries"
            )
        ids = [entry.id for entry in entries]
        if len(set(ids)) != len(ids):
            raise ValueError("Message ids must be unique within a batch")

        try:
            response = self._client.send_message_batch(
                QueueUrl=self._queue_url,
                Entries=[entry.to_entry() for entry in entries],
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("send_batch - %s: %s", type(e).__name__, e)
            raise QueueSendError(
                f"Unable to send messages to queue: {e}",
                details={"queue_url": self._queue_url, "entries": len(entries)},
            ) from e

        failed = response.get("Failed") or []
        if failed:
            raise QueueSendError(
                f"{len(failed)} of {len(entries)} messages rejected by queue",
                details={
                    "queue_url": self._queue_url,
                    "failed_ids": [f.get("Id") for f in failed],
                    "codes": sorted({str(f.get("Code")) for f in failed}),
                },
            )

        logger.debug("send_batch - Sent %d messages", len(entries))
        return len(entries)
