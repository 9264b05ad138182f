"""
Top‑level package for the Vidly rental store API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``vidly_api.app.main:app``.
"""

__all__ = []
