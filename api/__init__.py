"""
api: HTTP routes, per-request dependencies, middleware.
"""
