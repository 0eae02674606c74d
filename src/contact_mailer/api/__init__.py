"""
API Layer.

Flask HTTP endpoints, CORS policy and JSON error handling.
"""
