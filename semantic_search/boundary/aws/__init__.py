"""
AWS boundary clients.

Exports: BedrockEmbeddingClient, SQSQueueClient, resolve_connection_string
"""

from semantic_search.boundary.aws.bedrock_client import BedrockEmbeddingClient
from semantic_search.boundary.aws.secrets import resolve_connection_string
from semantic_search.boundary.aws.sqs_client import SQSQueueClient

__all__ = ["BedrockEmbeddingClient", "SQSQueueClient", "resolve_connection_string"]
