"""Infrastructure Layer — collaborator adapters and cross-cutting concerns.

Invariants:
    - Adapters implement the Protocols in core/repository_protocols.py
    - Every adapter raises only IdentityError subclasses (library errors are mapped)

Design Decisions:
    - One module per collaborator: swapping an adapter touches one file
"""
