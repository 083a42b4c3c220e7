"""Infrastructure Layer - database engine lifecycle and logging setup.

Invariants:
    - Infrastructure never imports from core/ domain logic except the error types
    - All storage failures are mapped to typed FolioError subclasses here
"""
