"""
Service layer abstraction.

Each service encapsulates business logic for a domain and raises the
typed errors from ``core.errors``.  Services call the storage helpers
in ``models`` and never talk HTTP.
"""
