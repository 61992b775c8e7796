"""
Per-record processing outcomes.

The batch consumer collects one RecordOutcome per delivered record and hands
the BatchReport back to the queue, which redelivers only the failed records.

Dependencies: pydantic
System role: Partial batch failure reporting
"""

from enum import Enum

from pydantic import BaseModel


class OutcomeStatus(str, Enum):
    """Result of processing one record."""

    SUCCESS = "success"
    FAILURE = "failure"


class RecordOutcome(BaseModel):
    """Outcome for a single delivered record."""

    message_id: str
    status: OutcomeStatus
    document_id: str | None = None
    error_type: str | None = None
    error: str | None = None
    retriable: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @classmethod
    def success(cls, message_id: str, document_id: str | None = None) -> "RecordOutcome":
        return cls(message_id=message_id, status=OutcomeStatus.SUCCESS, document_id=document_id)

    @classmethod
    def failure(
        cls,
        message_id: str,
        exc: BaseException,
        retriable: bool,
        document_id: str | None = None,
    ) -> "RecordOutcome":
        return cls(
            message_id=message_id,
            status=OutcomeStatus.FAILURE,
            document_id=document_id,
            error_type=type(exc).__name__,
            error=str(exc),
            retriable=retriable,
        )


class BatchReport(BaseModel):
    """Outcomes for one delivered batch, in delivery order."""

    outcomes: list[RecordOutcome] = []

    def add(self, outcome: RecordOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def failed_ids(self) -> list[str]:
        return [o.message_id for o in self.outcomes if not o.succeeded]

    @property
    def succeeded_ids(self) -> list[str]:
        return [o.message_id for o in self.outcomes if o.succeeded]

    def to_sqs_response(self) -> dict[str, list[dict[str, str]]]:
        """
        Partial batch response understood by the SQS event source mapping.

        Requires ReportBatchItemFailures on the mapping; listed messages stay
        on the queue, all others are deleted.
        """
        return {"batchItemFailures": [{"itemIdentifier": mid} for mid in self.failed_ids]}
