"""
Domain Layer

This package contains business logic organized by domain area.
Domain services implement core algorithms and should not handle
HTTP concerns (handlers translate their errors for the API).

Domains:
- xsd: class graph to XML Schema generation
"""
