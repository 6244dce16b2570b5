"""
Infrastructure Package
======================

Cross-cutting plumbing shared by the authentication and marketplace apps.

Modules:
    - container: Lazily built, cached domain services wired to each other
    - observability: OpenTelemetry tracing setup and helpers
"""
