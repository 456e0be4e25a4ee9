"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validators and entity constructors return Ok/Err, they never raise

Design Decisions:
    - Functional core separated from imperative shell: services/ awaits the
      collaborators, core/ decides what the results mean
"""
