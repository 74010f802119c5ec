"""Infrastructure Layer — database, HTTP and cache clients plus logging setup.

Invariants:
    - Infrastructure maps every backend exception onto core/errors.py types
    - Handles are created in the FastAPI lifespan and owned by app.state
"""
