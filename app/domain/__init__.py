"""
Domain layer for order-line management.

This layer contains business entities and their invariants,
independent of persistence concerns.
"""
