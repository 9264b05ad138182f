"""
Application package initializer.

The API is organised by domain: genres, customers, movies, rentals and
users each have a schema module, a service and a router defined in
``api/v1/endpoints``.  Persistence, security, configuration and logging
helpers live in ``core``.
"""

from .main import app  # noqa: F401
