"""
HTTP API
========

FastAPI driver exposing compilation and validation over HTTP.
"""
