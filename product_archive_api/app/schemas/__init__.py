"""
Pydantic schema definitions for API payloads.

Products are kept in memory as ``Product`` instances, so the same
model doubles as the stored record and the response body.  File
routes answer with the small envelope models in ``files``.
"""
