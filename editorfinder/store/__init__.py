"""Document store abstraction.

The application talks to a ``DocumentStore``; production wires in the
Firestore implementation, tests wire in the in-memory one. Nothing holds a
process-wide client: the store is built from settings and injected.
"""
