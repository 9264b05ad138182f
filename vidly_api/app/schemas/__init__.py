"""
Pydantic schema definitions for API payloads.

Each collection (genres, customers, movies, rentals, users) defines its
own request and response models.  Field names are snake_case in Python
and camelCase on the wire via aliases.
"""
