"""Core Layer — pure error-mapping logic, no IO, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Environment and transport are supplied by the shell

Design Decisions:
    - Functional core separated from imperative shell (ErrorResponder in services/)
"""
