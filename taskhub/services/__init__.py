# Services package init
"""
TaskHub Backend — Services Layer (Persistence Gateway)
========================================================

What:  Business logic between routes (HTTP) and the database.
How:   Services are stateless; each call receives the request's
       AsyncSession and the caller's user id.

Service Inventory:
    - scoping:          ownership predicates shared by the services below
    - AuthService:      registration and credential checks
    - ProjectService:   project CRUD scoped to the owner
    - TaskService:      task CRUD scoped through the parent project
"""
