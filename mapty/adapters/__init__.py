"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP reverse geocoding,
    file and key-value storage, and test doubles) used by use cases and the
    app controller.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by the web runtime (for wiring) and by tests (for mocks and
    transport-level behavior verification).
"""
