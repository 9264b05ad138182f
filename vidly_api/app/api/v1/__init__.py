"""
Version 1 of the API.

Bundles the genres, customers, movies, rentals and users endpoints.
"""
