"""Services Layer: lifecycle managers, scoring engine, badge evaluator.

Invariants:
    - Services talk to storage only through the LedgerStore protocol
    - Services never commit; the caller's unit of work owns the transaction
"""
