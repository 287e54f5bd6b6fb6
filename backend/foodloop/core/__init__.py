"""Core Layer: domain types, errors, rules and pure functions. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions here are pure and deterministic

Design Decisions:
    - Functional core separated from the imperative shell; services orchestrate
      LedgerStore calls around these rules
"""
