"""
Persistence primitives.

Modules here contain the only SQL in the application.  Services call
these functions and never build queries themselves.
"""
