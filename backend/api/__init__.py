"""
Whiteboard API package.

The FastAPI application lives in ``api.app``.
"""
