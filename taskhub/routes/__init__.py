# Routes package init
"""
TaskHub Backend — API Routes Package
======================================

What:  HTTP route handlers (one per resource and verb).

Route Inventory:
    - auth.py:      POST /api/register, /api/login, /api/logout
    - projects.py:  GET/POST /api/projects, GET/PUT/DELETE /api/projects/{id}
    - tasks.py:     GET/POST /api/tasks,    GET/PUT/DELETE /api/tasks/{id}
    - health.py:    GET  /health

Design Principle:
    Routes stay thin: they pull the identity and the database session from
    dependencies, call a service, and pick the status code. Ownership rules
    live in the services.
"""
