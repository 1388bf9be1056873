"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Persistence primitives live in ``models``, business rules
in ``services``, payload schemas in ``schemas`` and the HTTP routes in
``api/v1/endpoints``.  Versioning is handled by grouping routers under
the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
