"""FoodLoop Application Package: donation lifecycle and gamification ledger.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
