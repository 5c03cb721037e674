"""Shared building blocks for the demo services.

Invariants:
    - Nothing here imports from bookstore/ or bytedefence/ (dependency arrows point inward)
    - Modules stay service-agnostic: errors, logging, DB sessions, token helpers, GraphQL plumbing
"""
