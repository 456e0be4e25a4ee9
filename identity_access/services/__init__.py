"""Services Layer — command handlers and the step chain that sequences them.

Invariants:
    - Handlers receive every collaborator through their constructor
    - Collaborator exceptions are turned into Err by step_chain.perform only

Design Decisions:
    - One handler per command for locality
"""
