"""
Service layer.

Each service encapsulates the store operations for one collection and
raises the domain exceptions from ``core.exceptions``; API handlers
translate those into HTTP responses.
"""
