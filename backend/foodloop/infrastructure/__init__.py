"""Infrastructure Layer: database sessions, ledger store, logging.

Invariants:
    - SQLAlchemy errors are mapped to StorageError before leaving this layer
"""
