"""Infrastructure Layer — framework adapters and cross-cutting concerns.

Invariants:
    - Infrastructure never contains error-mapping rules (those live in core/)
"""
