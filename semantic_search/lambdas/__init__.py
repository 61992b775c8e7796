"""
AWS Lambda entrypoints.

- embed_handler.handler: SQS-triggered batch consumer
- backfill_handler.handler: API Gateway backfill trigger
- search_handler.handler: API Gateway vector search
"""
