"""Adapters for external services: AWS (Bedrock, SQS, Secrets Manager) and MongoDB Atlas."""
