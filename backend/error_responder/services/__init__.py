"""Services Layer — the imperative shell around core error mapping.

Invariants:
    - ErrorResponder is the only component that touches a response sink
"""
