"""
TaskHub Backend — Task API Tests
==================================

What:  Task CRUD over HTTP; ownership flows through the parent project.

What we test:
    ✅ End-to-end scenario: u1's task is listed for u1 and not for u2
    ✅ Creating in a foreign or unknown project → 400, no row created
    ✅ Foreign tasks → 404 for GET, PUT and DELETE
    ✅ Moving a task between projects requires owning the target
    ✅ PUT resets omitted fields to defaults
"""

import pytest

from helpers import create_project, create_task, signed_in


class TestTaskScenario:

    @pytest.mark.asyncio
    async def test_task_visible_only_to_project_owner(self, client_factory):
        u1, u2 = client_factory(), client_factory()
        user1 = await signed_in(u1, "u1")
        await signed_in(u2, "u2")

        project_resp = await u1.post("/api/projects", json={"name": "P1"})
        assert project_resp.status_code == 201
        p1 = project_resp.json()
        assert p1["userId"] == user1["id"]

        task_resp = await u1.post("/api/tasks", json={"title": "T1", "projectId": p1["id"]})
        assert task_resp.status_code == 201
        t1 = task_resp.json()

        u1_tasks = (await u1.get("/api/tasks")).json()
        u2_tasks = (await u2.get("/api/tasks")).json()

        assert t1["id"] in [t["id"] for t in u1_tasks]
        assert t1["id"] not in [t["id"] for t in u2_tasks]


class TestTaskCreate:

    @pytest.mark.asyncio
    async def test_create_task_defaults(self, client):
        await signed_in(client, "u1")
        project = await create_project(client)

        task = await create_task(client, project["id"], "T1")

        assert task["title"] == "T1"
        assert task["projectId"] == project["id"]
        assert task["completed"] is False
        assert task["priority"] == "medium"
        assert task["description"] is None
        assert task["dueDate"] is None

    @pytest.mark.asyncio
    async def test_create_in_foreign_project_is_rejected(self, client_factory):
        alice, bob = client_factory(), client_factory()
        await signed_in(alice, "alice")
        await signed_in(bob, "bob")
        alices_project = await create_project(alice, "Alice's")

        response = await bob.post(
            "/api/tasks", json={"title": "sneaky", "projectId": alices_project["id"]}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid projectId for this user."
        assert (await alice.get("/api/tasks")).json() == []
        assert (await bob.get("/api/tasks")).json() == []

    @pytest.mark.asyncio
    async def test_create_in_unknown_project_is_rejected(self, client):
        await signed_in(client, "u1")

        response = await client.post("/api/tasks", json={"title": "T", "projectId": 4242})

        assert response.status_code == 400
        assert (await client.get("/api/tasks")).json() == []

    @pytest.mark.asyncio
    async def test_create_with_out_of_range_project_id_is_rejected(self, client):
        await signed_in(client, "u1")

        response = await client.post(
            "/api/tasks", json={"title": "T", "projectId": 99999999999999999999}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid projectId for this user."

    @pytest.mark.asyncio
    async def test_create_without_project_id_is_rejected(self, client):
        await signed_in(client, "u1")

        response = await client.post("/api/tasks", json={"title": "T"})

        assert response.status_code == 400
        assert "projectId" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_create_without_title_is_rejected(self, client):
        await signed_in(client, "u1")
        project = await create_project(client)

        response = await client.post("/api/tasks", json={"projectId": project["id"]})

        assert response.status_code == 400


class TestTaskUpdate:

    @pytest.mark.asyncio
    async def test_toggle_completed(self, client):
        await signed_in(client, "u1")
        project = await create_project(client)
        task = await create_task(client, project["id"])

        done = await client.put(f"/api/tasks/{task['id']}", json={"title": "T1", "completed": True})
        undone = await client.put(f"/api/tasks/{task['id']}", json={"title": "T1", "completed": False})

        assert done.json()["completed"] is True
        assert undone.json()["completed"] is False

    @pytest.mark.asyncio
    async def test_put_resets_omitted_fields(self, client):
        await signed_in(client, "u1")
        project = await create_project(client)
        task = await create_task(
            client,
            project["id"],
            "T1",
            description="details",
            completed=True,
            priority="high",
            dueDate="2026-11-01T09:00:00",
        )

        response = await client.put(f"/api/tasks/{task['id']}", json={"title": "T1 v2"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "T1 v2"
        assert updated["description"] is None
        assert updated["completed"] is False
        assert updated["priority"] == "medium"
        assert updated["dueDate"] is None
        # projectId omitted: the task stays where it was
        assert updated["projectId"] == project["id"]

    @pytest.mark.asyncio
    async def test_move_to_own_project(self, client):
        await signed_in(client, "u1")
        source = await create_project(client, "Source")
        target = await create_project(client, "Target")
        task = await create_task(client, source["id"])

        response = await client.put(
            f"/api/tasks/{task['id']}", json={"title": "T1", "projectId": target["id"]}
        )

        assert response.status_code == 200
        assert response.json()["projectId"] == target["id"]

    @pytest.mark.asyncio
    async def test_move_to_out_of_range_project_is_rejected(self, client):
        await signed_in(client, "u1")
        project = await create_project(client)
        task = await create_task(client, project["id"])

        response = await client.put(
            f"/api/tasks/{task['id']}", json={"title": "T1", "projectId": 2**40}
        )

        assert response.status_code == 400
        unchanged = (await client.get(f"/api/tasks/{task['id']}")).json()
        assert unchanged["projectId"] == project["id"]

    @pytest.mark.asyncio
    async def test_due_date_reads_back_as_same_instant(self, client):
        await signed_in(client, "u1")
        project = await create_project(client)

        created = await create_task(
            client, project["id"], "T1", dueDate="2026-03-01T08:30:00-03:00"
        )
        fetched = (await client.get(f"/api/tasks/{created['id']}")).json()

        assert created["dueDate"] == fetched["dueDate"]
        assert fetched["dueDate"].startswith("2026-03-01T11:30:00")

    @pytest.mark.asyncio
    async def test_move_to_foreign_project_is_rejected(self, client_factory):
        alice, bob = client_factory(), client_factory()
        await signed_in(alice, "alice")
        await signed_in(bob, "bob")
        alices_project = await create_project(alice, "Alice's")
        bobs_project = await create_project(bob, "Bob's")
        task = await create_task(bob, bobs_project["id"], "Bob's task")

        response = await bob.put(
            f"/api/tasks/{task['id']}",
            json={"title": "moved", "projectId": alices_project["id"]},
        )

        assert response.status_code == 400
        unchanged = (await bob.get(f"/api/tasks/{task['id']}")).json()
        assert unchanged["projectId"] == bobs_project["id"]
        assert unchanged["title"] == "Bob's task"
        assert (await alice.get("/api/tasks")).json() == []


class TestTaskOwnership:

    @pytest.mark.asyncio
    async def test_cannot_get_put_or_delete_foreign_task(self, client_factory):
        alice, bob = client_factory(), client_factory()
        await signed_in(alice, "alice")
        bob_user = await signed_in(bob, "bob")
        alices_project = await create_project(alice, "Alice's")
        task = await create_task(alice, alices_project["id"], "private")
        bobs_project = await create_project(bob, "Bob's")
        url = f"/api/tasks/{task['id']}"

        get_resp = await bob.get(url)
        put_resp = await bob.put(url, json={"title": "x", "projectId": bobs_project["id"]})
        delete_resp = await bob.delete(url)

        assert bob_user["id"] != alices_project["userId"]
        assert get_resp.status_code == 404
        assert put_resp.status_code == 404
        assert delete_resp.status_code == 404
        assert get_resp.json()["error"] == "Task not found"

        still_there = await alice.get(url)
        assert still_there.status_code == 200
        assert still_there.json()["title"] == "private"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["abc", "99999999999999999999"])
    async def test_impossible_task_id_is_not_found(self, client, bad_id):
        await signed_in(client, "u1")
        project = await create_project(client)
        url = f"/api/tasks/{bad_id}"

        get_resp = await client.get(url)
        put_resp = await client.put(url, json={"title": "x", "projectId": project["id"]})
        delete_resp = await client.delete(url)

        assert get_resp.status_code == 404
        assert get_resp.json()["error"] == "Task not found"
        assert put_resp.status_code == 404
        assert delete_resp.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_own_task(self, client):
        await signed_in(client, "u1")
        project = await create_project(client)
        task = await create_task(client, project["id"])

        response = await client.delete(f"/api/tasks/{task['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Task deleted successfully"}
        assert (await client.get(f"/api/tasks/{task['id']}")).status_code == 404
        # The parent project is untouched
        assert (await client.get(f"/api/projects/{project['id']}")).status_code == 200
