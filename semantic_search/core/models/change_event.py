"""
Change event schema.

The envelope a MongoDB Atlas trigger delivers through EventBridge to SQS, and
the same envelope the backfill dispatcher produces. Both must be
indistinguishable to the batch consumer:

{
    "version": "0",
    "id": "<uuid>",
    "detail-type": "MongoDB Database Trigger for sample_mflix.movies",
    "detail": {
        "operationType": "update",
        "fullDocument": {...},
        "documentKey": {"_id": ...}
    }
}

Bodies are MongoDB Extended JSON so ObjectIds and dates survive the queue.

Dependencies: pydantic, bson
System role: Data validation and wire contract for queued change events
"""

import uuid
from typing import Any

from bson import json_util
from bson.json_util import RELAXED_JSON_OPTIONS
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from semantic_search.core.exceptions import MessageParseError


class DocumentKey(BaseModel):
    """Identity of the changed document."""

    model_config = ConfigDict(populate_by_name=True)

    id: Any = Field(..., alias="_id")


class ChangeDetail(BaseModel):
    """Change stream payload carried in the event detail."""

    model_config = ConfigDict(extra="allow")

    operationType: str
    fullDocument: dict[str, Any]
    documentKey: DocumentKey


class ChangeEvent(BaseModel):
    """EventBridge-style envelope around a document change."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    version: str = "0"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    detail_type: str = Field(..., alias="detail-type")
    detail: ChangeDetail

    @classmethod
    def for_document(cls, document: dict[str, Any], trigger_name: str) -> "ChangeEvent":
        """
        Build the "update" event the database trigger would emit for a document.

        Args:
            document: Full document snapshot including its _id
            trigger_name: detail-type of the trigger being imitated

        Returns:
            ChangeEvent: Envelope with the document as fullDocument
        """
        return cls(
            detail_type=trigger_name,
            detail=ChangeDetail(
                operationType="update",
                fullDocument=document,
                documentKey=DocumentKey(id=document["_id"]),
            ),
        )

    @classmethod
    def from_message_body(cls, body: str | None) -> "ChangeEvent":
        """
        Parse a queued message body.

        Args:
            body: Extended JSON message body

        Returns:
            ChangeEvent: Validated event

        Raises:
            MessageParseError: Empty body, invalid JSON or schema mismatch
        """
        if not body:
            raise MessageParseError("Unable to parse SQS record: empty message body")
        try:
            payload = json_util.loads(body)
        except ValueError as e:
            raise MessageParseError(f"Unable to parse SQS record: invalid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise MessageParseError("Unable to parse SQS record: body is not an object")
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise MessageParseError(
                "Unable to parse SQS record: invalid change event",
                details={"errors": e.error_count()},
            ) from e

    def to_message_body(self) -> str:
        """Serialize to an Extended JSON message body."""
        return json_util.dumps(self.model_dump(by_alias=True), json_options=RELAXED_JSON_OPTIONS)

    @property
    def document_id(self) -> Any:
        return self.detail.documentKey.id

    def document_without_key(self) -> dict[str, Any]:
        """Full document snapshot minus _id, which is passed separately on write."""
        return {k: v for k, v in self.detail.fullDocument.items() if k != "_id"}


class QueueMessage(BaseModel):
    """One outbound queue entry; id is unique within its send batch."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    body: str

    @classmethod
    def from_event(cls, event: ChangeEvent) -> "QueueMessage":
        return cls(body=event.to_message_body())

    def to_entry(self) -> dict[str, str]:
        """SendMessageBatch request entry."""
        return {"Id": self.id, "MessageBody": self.body}
