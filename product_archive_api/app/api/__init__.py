"""
HTTP layer.

``v1`` holds the versioned product routes, ``files`` the upload,
download and archive routes.  ``deps`` provides the services to the
routes through FastAPI's dependency injection, which is also how the
tests swap in a temporary storage root or an empty product store.
"""
