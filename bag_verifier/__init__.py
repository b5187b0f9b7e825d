"""
Top-level package for the handbag verification service.

The service exposes a FastAPI app (see `main.py`) with:

- GET /
- GET /health
- POST /verify (alias: POST /authenticate)
"""
