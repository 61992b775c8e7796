"""
MongoDB Atlas boundary.

Exports: MongoConnection, MongoDocumentStore, normalize_key
"""

from semantic_search.boundary.mongo.connection import MongoConnection
from semantic_search.boundary.mongo.document_store import MongoDocumentStore, normalize_key

__all__ = ["MongoConnection", "MongoDocumentStore", "normalize_key"]
