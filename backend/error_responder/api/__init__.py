"""API Layer — FastAPI error handlers.

Invariants:
    - Handlers registered explicitly via register_error_handlers (no auto-discovery)
    - All error responses share the ErrorResponder payload shape
"""
