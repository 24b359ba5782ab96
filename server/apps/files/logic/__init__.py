"""Business logic layer for files app.

This package contains all business logic for file records:
- Building records from uploads, other records and base64 payloads
- Synchronizing record content with blob storage

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).

Reference: https://github.com/dry-python
for decoupling business logic from Django views.
"""
