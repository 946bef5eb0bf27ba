from __future__ import annotations

import pytest
from beanie import PydanticObjectId
from fastapi import status
from httpx import AsyncClient

from taskboard.models import Project, Task

pytestmark = pytest.mark.asyncio


async def _create_project(client: AsyncClient, headers: dict[str, str], title: str = "Website") -> dict:
    response = await client.post(
        "/api/projects",
        json={"title": title, "description": "Marketing site."},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


async def _create_task(client: AsyncClient, headers: dict[str, str], project_id: str, **fields) -> dict:
    body = {"title": "Draft copy", "project": project_id}
    body.update(fields)
    response = await client.post("/api/tasks", json=body, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


async def test_create_task_applies_defaults_and_embeds_references(
    client: AsyncClient,
    register_user,
) -> None:
    alice = await register_user(name="Alice", email="alice@example.com")
    project = await _create_project(client, alice["headers"], title="Website")

    task = await _create_task(client, alice["headers"], project["id"], title="Draft copy")

    assert task["title"] == "Draft copy"
    assert task["description"] == ""
    assert task["status"] == "Todo"
    assert task["priority"] == "Medium"
    assert task["dueDate"] is None
    assert task["project"] == {"id": project["id"], "title": "Website"}
    assert task["assignedTo"] == {
        "id": alice["user"]["id"],
        "name": "Alice",
        "email": "alice@example.com",
    }


async def test_create_task_accepts_all_fields(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])

    task = await _create_task(
        client,
        alice["headers"],
        project["id"],
        title="Ship it",
        description="Everything",
        status="In Progress",
        priority="High",
        dueDate="2030-01-15T00:00:00Z",
    )

    assert task["status"] == "In Progress"
    assert task["priority"] == "High"
    assert task["description"] == "Everything"
    assert task["dueDate"].startswith("2030-01-15")


async def test_create_task_in_foreign_project_is_not_found(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    bob = await register_user()
    project = await _create_project(client, alice["headers"])

    response = await client.post(
        "/api/tasks",
        json={"title": "Sneaky", "project": project["id"]},
        headers=bob["headers"],
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Project not found or not authorized."
    assert await Task.find_all().count() == 0


@pytest.mark.parametrize("project_id", ["not-an-id", str(PydanticObjectId())])
async def test_create_task_with_unknown_project_is_not_found(
    client: AsyncClient,
    register_user,
    project_id: str,
) -> None:
    alice = await register_user()

    response = await client.post(
        "/api/tasks",
        json={"title": "Orphan", "project": project_id},
        headers=alice["headers"],
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_create_task_requires_title_and_project(client: AsyncClient, register_user) -> None:
    alice = await register_user()

    response = await client.post("/api/tasks", json={"description": "x"}, headers=alice["headers"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Please provide all required fields: title, project."


async def test_create_task_rejects_unknown_status(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])

    response = await client.post(
        "/api/tasks",
        json={"title": "Bad", "project": project["id"], "status": "Blocked"},
        headers=alice["headers"],
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "validation_error"


async def test_list_tasks_scoped_to_caller_and_filterable(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    bob = await register_user()
    website = await _create_project(client, alice["headers"], title="Website")
    mobile = await _create_project(client, alice["headers"], title="Mobile")
    first = await _create_task(client, alice["headers"], website["id"], title="First")
    second = await _create_task(client, alice["headers"], mobile["id"], title="Second")
    third = await _create_task(client, alice["headers"], website["id"], title="Third")
    bobs_project = await _create_project(client, bob["headers"])
    await _create_task(client, bob["headers"], bobs_project["id"], title="Bob's")

    everything = await client.get("/api/tasks", headers=alice["headers"])
    filtered = await client.get(
        "/api/tasks",
        params={"project": website["id"]},
        headers=alice["headers"],
    )

    assert everything.status_code == status.HTTP_200_OK
    assert [task["id"] for task in everything.json()] == [third["id"], second["id"], first["id"]]
    assert [task["id"] for task in filtered.json()] == [third["id"], first["id"]]
    assert all(task["project"]["title"] == "Website" for task in filtered.json())


async def test_list_tasks_with_orphaned_task_reports_null_project(
    client: AsyncClient,
    register_user,
) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])
    task = await _create_task(client, alice["headers"], project["id"])
    stored = await Project.get(PydanticObjectId(project["id"]))
    assert stored is not None
    await stored.delete()

    response = await client.get(f"/api/tasks/{task['id']}", headers=alice["headers"])

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["project"] is None


async def test_task_statistics_for_single_task(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])
    await _create_task(client, alice["headers"], project["id"])

    response = await client.get("/api/tasks/stats/summary", headers=alice["headers"])

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "total": 1,
        "todo": 1,
        "inProgress": 0,
        "done": 0,
        "highPriority": 0,
    }


async def test_task_statistics_count_each_bucket(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    bob = await register_user()
    project = await _create_project(client, alice["headers"])
    await _create_task(client, alice["headers"], project["id"], status="Todo", priority="High")
    await _create_task(client, alice["headers"], project["id"], status="In Progress", priority="High")
    await _create_task(client, alice["headers"], project["id"], status="Done", priority="Low")
    await _create_task(client, alice["headers"], project["id"], status="Done")

    alice_stats = await client.get("/api/tasks/stats/summary", headers=alice["headers"])
    bob_stats = await client.get("/api/tasks/stats/summary", headers=bob["headers"])

    assert alice_stats.json() == {
        "total": 4,
        "todo": 1,
        "inProgress": 1,
        "done": 2,
        "highPriority": 2,
    }
    assert bob_stats.json() == {
        "total": 0,
        "todo": 0,
        "inProgress": 0,
        "done": 0,
        "highPriority": 0,
    }


async def test_update_task_changes_only_present_fields(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])
    task = await _create_task(
        client,
        alice["headers"],
        project["id"],
        title="Draft copy",
        description="Hero section",
        priority="High",
    )

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"status": "Done"},
        headers=alice["headers"],
    )

    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["status"] == "Done"
    assert payload["title"] == "Draft copy"
    assert payload["description"] == "Hero section"
    assert payload["priority"] == "High"


async def test_update_task_can_clear_due_date(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])
    task = await _create_task(client, alice["headers"], project["id"], dueDate="2030-01-15T00:00:00Z")

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"dueDate": None},
        headers=alice["headers"],
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["dueDate"] is None
    stored = await Task.get(PydanticObjectId(task["id"]))
    assert stored is not None
    assert stored.due_date is None


async def test_update_task_rejects_null_status(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])
    task = await _create_task(client, alice["headers"], project["id"])

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"status": None},
        headers=alice["headers"],
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_update_task_cannot_move_between_projects(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    website = await _create_project(client, alice["headers"], title="Website")
    mobile = await _create_project(client, alice["headers"], title="Mobile")
    task = await _create_task(client, alice["headers"], website["id"])

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"project": mobile["id"], "title": "Renamed"},
        headers=alice["headers"],
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Renamed"
    assert response.json()["project"]["id"] == website["id"]


async def test_foreign_task_is_forbidden_and_missing_task_not_found(
    client: AsyncClient,
    register_user,
) -> None:
    alice = await register_user()
    bob = await register_user()
    project = await _create_project(client, alice["headers"])
    task = await _create_task(client, alice["headers"], project["id"])

    for method, body in (("GET", None), ("PUT", {"title": "Mine now"}), ("DELETE", None)):
        foreign = await client.request(method, f"/api/tasks/{task['id']}", json=body, headers=bob["headers"])
        assert foreign.status_code == status.HTTP_403_FORBIDDEN

    missing = await client.get(f"/api/tasks/{PydanticObjectId()}", headers=alice["headers"])
    malformed = await client.get("/api/tasks/definitely-not-an-id", headers=alice["headers"])
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert missing.json()["message"] == "Task not found."
    assert malformed.status_code == status.HTTP_404_NOT_FOUND

    stored = await Task.get(PydanticObjectId(task["id"]))
    assert stored is not None
    assert stored.title == task["title"]


async def test_delete_task(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])
    task = await _create_task(client, alice["headers"], project["id"])

    response = await client.delete(f"/api/tasks/{task['id']}", headers=alice["headers"])
    again = await client.get(f"/api/tasks/{task['id']}", headers=alice["headers"])

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Task removed"}
    assert again.status_code == status.HTTP_404_NOT_FOUND


async def test_list_tasks_rejects_malformed_project_filter(client: AsyncClient, register_user) -> None:
    alice = await register_user()

    response = await client.get("/api/tasks", params={"project": "nope"}, headers=alice["headers"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "validation_error"


async def test_update_task_with_every_field_overwrites_all(client: AsyncClient, register_user) -> None:
    alice = await register_user()
    project = await _create_project(client, alice["headers"])
    task = await _create_task(
        client,
        alice["headers"],
        project["id"],
        title="Draft copy",
        description="Hero section",
        status="Todo",
        priority="Low",
        dueDate="2030-01-15T00:00:00Z",
    )

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={
            "title": "Final copy",
            "description": "",
            "status": "Done",
            "priority": "High",
            "dueDate": "2031-06-01T00:00:00Z",
        },
        headers=alice["headers"],
    )

    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["title"] == "Final copy"
    assert payload["description"] == ""
    assert payload["status"] == "Done"
    assert payload["priority"] == "High"
    assert payload["dueDate"].startswith("2031-06-01")

    stored = await Task.get(PydanticObjectId(task["id"]))
    assert stored is not None
    assert stored.title == "Final copy"
    assert stored.description == ""
    assert stored.status.value == "Done"
    assert stored.priority.value == "High"
    assert stored.due_date is not None
    assert (stored.due_date.year, stored.due_date.month, stored.due_date.day) == (2031, 6, 1)
