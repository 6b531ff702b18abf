"""
Core app - Shared plumbing for the API apps.

This app provides:
- The error taxonomy raised by services (errors.py)
- The exception handlers that turn errors into the JSON envelope (handlers.py)
- Offset/limit pagination (pagination.py)
- Database connection lifecycle helpers (database.py)
"""
