"""
Version 1 of the product API.

Breaking changes to the product routes should go into a new version
subpackage (e.g. ``v2``) so existing clients keep working.
"""
