"""
MongoDB Atlas semantic search with Amazon Bedrock embeddings.

Backfills embeddings for documents that lack them, keeps them current from
change events delivered over SQS, and answers vector similarity queries.
"""

__version__ = "0.1.0"
