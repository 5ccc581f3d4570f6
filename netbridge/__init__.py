"""netbridge — in-process endpoint registry for simulated network peers.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Explicit imports only, no star exports; the root exposes only the version
"""

__version__ = "1.0.0"
