"""
HTTP helpers shared by the API tests.
"""

from httpx import AsyncClient

DEFAULT_PASSWORD = "correct horse battery staple"


async def register(client: AsyncClient, username: str, email: str, password: str = DEFAULT_PASSWORD):
    return await client.post(
        "/api/register",
        json={"username": username, "email": email, "password": password},
    )


async def login(client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD):
    return await client.post("/api/login", json={"email": email, "password": password})


async def signed_in(client: AsyncClient, username: str) -> dict:
    """Registers `username` and logs the client in. Returns the identity."""
    email = f"{username}@example.com"
    response = await register(client, username, email)
    assert response.status_code == 201, response.text
    response = await login(client, email)
    assert response.status_code == 200, response.text
    return response.json()["user"]


async def create_project(client: AsyncClient, name: str = "P1", **fields) -> dict:
    response = await client.post("/api/projects", json={"name": name, **fields})
    assert response.status_code == 201, response.text
    return response.json()


async def create_task(client: AsyncClient, project_id: int, title: str = "T1", **fields) -> dict:
    response = await client.post(
        "/api/tasks", json={"title": title, "projectId": project_id, **fields}
    )
    assert response.status_code == 201, response.text
    return response.json()
