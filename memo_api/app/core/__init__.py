"""
Cross‑cutting infrastructure: settings, logging, database access,
error types and authentication helpers.
"""
