"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Everything here does IO or touches process-wide state
    - Initialized once from the FastAPI lifespan
"""
