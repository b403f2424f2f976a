# Schemas package init
"""
TaskHub Backend — API Schemas
===============================

Pydantic models defining the API contract. Kept separate from the ORM
models so the API controls exactly which columns are exposed.

    - common.py:  CamelModel base, errors, messages, health
    - user.py:    register/login bodies, public identity
    - project.py: project body and response
    - task.py:    task bodies and response
"""
