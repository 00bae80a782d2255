# Services package init
"""
Social API: Services Layer
==========================

What:  Business logic layer sitting between routes (HTTP) and the database.
How:   Services accept a session plus plain values, run the statements and
       return response schemas or raise application exceptions.

Service Inventory:
    - PostService: list / get / create / edit / delete / restore / like / dislike
"""
