"""Shared contracts — enums and DTOs used by the API, the relay and the client.

Invariants:
    - No imports from api/, relay/ or client/
"""
