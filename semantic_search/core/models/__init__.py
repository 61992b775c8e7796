"""
Models for the embedding pipeline and search path.

Exports: ChangeEvent, ChangeDetail, DocumentKey, QueueMessage, SQSRecord, SQSEvent,
RecordOutcome, OutcomeStatus, BatchReport, SearchRequest, SearchResult, BackfillResult, ErrorResponse
"""

from .change_event import ChangeDetail, ChangeEvent, DocumentKey, QueueMessage
from .outcome import BatchReport, OutcomeStatus, RecordOutcome
from .search import BackfillResult, ErrorResponse, SearchRequest, SearchResult
from .sqs_event import SQSEvent, SQSRecord

__all__ = [
    "BackfillResult",
    "BatchReport",
    "ChangeDetail",
    "ChangeEvent",
    "DocumentKey",
    "ErrorResponse",
    "OutcomeStatus",
    "QueueMessage",
    "RecordOutcome",
    "SQSEvent",
    "SQSRecord",
    "SearchRequest",
    "SearchResult",
]
