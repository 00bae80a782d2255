# Routes package init
"""
Social API: Routes Package
==========================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - posts.py:   /posts.get, /posts.getById, /posts.post, /posts.edit,
                  /posts.delete, /posts.restore, /posts.like, /posts.dislike
    - health.py:  GET /health

Routes stay thin: read query parameters, validate them, call PostService,
return the schema. Statements live in the service.
"""
