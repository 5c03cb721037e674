"""Pure Domain Logic — statistics grouping and item reconciliation, no I/O.

Invariants:
    - Functions here take plain values and return plain values; no sessions, no HTTP
"""
