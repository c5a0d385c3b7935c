# Routes package init
"""
Page Relay — API Routes Package
=================================

What:  HTTP route handlers; together they form the relay's single routing table.

Route Inventory:
    - health.py:  GET    /api/health
    - pages.py:   GET    /api/database
                  GET    /api/pages
                  POST   /api/page
                  GET    /api/page/{id}
                  PATCH  /api/page/{id}
                  POST   /api/page/{id}          (action: update | delete)
                  DELETE /api/page/{id}
                  GET    /api/page/{id}/content
                  PUT    /api/page/{id}/content
    - blocks.py:  GET    /api/blocks/{id}
                  POST   /api/blocks/{id}/append
                  DELETE /api/blocks/{id}
                  PATCH  /api/blocks/{id}

Routes stay thin: pull data out of the request, call PageService, return its
result. Errors propagate to the global handlers in main.py.
"""
