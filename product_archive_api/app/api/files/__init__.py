"""
File routes, mounted under ``/api/files``.

These routes predate the versioned product API and keep their
unversioned prefix.
"""
