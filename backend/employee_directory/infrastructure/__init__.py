"""Infrastructure Layer — database sessions, HTTP client, logging.

Invariants:
    - Infrastructure never imports from core/ domain logic except the error hierarchy
    - External failures are mapped to typed errors before leaving this layer
"""
