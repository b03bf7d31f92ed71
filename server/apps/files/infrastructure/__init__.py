"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Object store client (S3/MinIO)
- Storage backends mapping notes to buckets
- Object metadata helpers (identifiers, display names)

Keep infrastructure concerns separate from business logic.
"""
