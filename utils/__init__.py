"""
utils/ - Shared Helpers
=======================
Logging setup, error types and input coercion.
"""
