"""Infrastructure layer for files app.

This package contains integrations with external systems:
- S3-compatible storage backend (MinIO/S3/R2)
- Key-addressed blob store over any Django storage
- MIME type sniffing and extension lookup

Keep infrastructure concerns separate from business logic.
"""
