# @TASK S4-T4.1 - API package

"""Journal search REST API package.

Sub-modules expose FastAPI routers for each domain:
- search: cross-entity search with filters
- tags: tag catalog for building filter chips
"""
