"""
HTTP routes.

Each module exposes ``routes``: Starlette routes registered without a method
list, so every HTTP method, including non-standard ones, reaches the handler.
"""
