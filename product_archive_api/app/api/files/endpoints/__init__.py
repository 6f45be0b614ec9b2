"""
Endpoint modules for the file routes: raw storage and ZIP archives.
"""
