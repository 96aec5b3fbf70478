"""
API package - FastAPI routers, dependencies, middleware and response helpers.
"""
