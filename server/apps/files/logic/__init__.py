"""Business logic layer for files app.

This package contains the operations available on note files:
- upload, download, listing and deletion

Storage details live in ``infrastructure``, so the backend can be
replaced without touching request-shaping logic here.
"""
