"""
Pydantic schema definitions for API payloads.

Each domain (users, products, swap orders) defines its own models for
request and response bodies.  Request models carry the field rules
from ``core.validation``; read models describe stored documents, whose
identity is exposed as ``_id`` and whose fields use camelCase names.
"""
