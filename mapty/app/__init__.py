"""Application composition layer.

The controller in this package wires the domain, use cases, and ports into
the travel log workflow without placing business logic in views.
"""
