"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own IO (database access); core decides, services execute
"""
