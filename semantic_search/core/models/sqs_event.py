"""
SQS Lambda event schema.

Validates the batch of records Lambda delivers from the events queue.

Dependencies: pydantic
System role: Inbound batch contract for the embedding consumer
"""

from pydantic import BaseModel, ConfigDict, Field


class SQSRecord(BaseModel):
    """Single SQS record wrapper."""

    model_config = ConfigDict(extra="allow")

    messageId: str
    receiptHandle: str = ""
    body: str  # Extended JSON string containing a ChangeEvent
    attributes: dict = Field(default_factory=dict)
    messageAttributes: dict = Field(default_factory=dict)
    md5OfBody: str = ""

    @property
    def receive_count(self) -> int:
        """Number of times SQS has delivered this message."""
        try:
            return int(self.attributes.get("ApproximateReceiveCount", 1))
        except (TypeError, ValueError):
            return 1


class SQSEvent(BaseModel):
    """Complete SQS Lambda event."""

    Records: list[SQSRecord] = Field(default_factory=list)
