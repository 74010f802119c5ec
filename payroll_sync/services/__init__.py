"""Service Layer — read-repair employee sync, TTL contribution cache, oracle master data.

Invariants:
    - Services receive their stores and clients through the constructor
    - Services never import FastAPI; routes translate results into HTTP
"""
