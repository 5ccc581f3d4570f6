"""Core Layer — pure registry logic, no IO, no async, no settings.

Invariants:
    - No module in core/ imports from api/, infrastructure/, schemas/ or config
    - Registry operations never raise on bad preconditions; they return sentinels

Design Decisions:
    - Functional core separated from the imperative shell (FastAPI inspection app)
"""
