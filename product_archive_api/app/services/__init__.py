"""
Service layer.

``ProductStore``/``ProductService`` hold the product rules over an
in-memory list; ``FileStorageService`` and ``FileArchiveService`` do
all filesystem work below the configured storage root.  None of the
services know about HTTP.
"""
