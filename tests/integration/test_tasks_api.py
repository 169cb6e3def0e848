"""
API tests for the task endpoints.
"""

import pytest


@pytest.fixture
def project_id(client, auth_headers):
    response = client.post("/api/projects", json={"name": "Harbour Tower", "client": "Port Authority"},
                           headers=auth_headers)
    assert response.status_code == 201
    return response.json()["project"]["id"]


@pytest.fixture
def staff_id(client, auth_headers):
    response = client.post("/api/staff", json={"name": "Nimal Perera", "email": "nimal@example.com"},
                           headers=auth_headers)
    assert response.status_code == 201
    return response.json()["staff"]["id"]


def task_body(project_id, **overrides):
    body = {
        "name": "Pour foundation slab",
        "description": "Grade 25 concrete for the east wing",
        "project": project_id,
        "startDate": "2026-03-01T08:00:00Z",
        "endDate": "2026-03-05T17:00:00Z",
        "category": "construction",
        "priority": "high",
    }
    body.update(overrides)
    return body


def create_task(client, auth_headers, project_id, **overrides):
    response = client.post("/api/tasks", json=task_body(project_id, **overrides), headers=auth_headers)
    assert response.status_code == 201, response.json()
    return response.json()["task"]


class TestTaskEndpoints:
    """Test cases for task CRUD over HTTP."""

    def test_requires_authentication(self, client):
        response = client.get("/api/tasks")

        assert response.status_code == 401
        assert response.json() == {"message": "Not authenticated"}

    def test_create_task(self, client, auth_headers, project_id, staff_id):
        response = client.post(
            "/api/tasks",
            json=task_body(project_id, assignees=[{"user": staff_id, "role": "lead"}],
                           checklist=[{"item": "Check rebar spacing"}]),
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Task created successfully"
        task = body["task"]
        assert task["status"] == "not_started"
        assert task["project"] == project_id
        assert task["createdBy"] == "user-123"
        assert task["assignees"][0]["user"] == staff_id
        assert task["assignees"][0]["role"] == "lead"
        assert task["checklist"][0]["id"]
        assert task["statusHistory"] == []
        assert "isOverdue" in task

    def test_create_task_missing_field(self, client, auth_headers, project_id):
        body = task_body(project_id)
        del body["name"]

        response = client.post("/api/tasks", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: name"

    @pytest.mark.parametrize("description", ["", "   "])
    def test_create_task_blank_description(self, client, auth_headers, project_id, description):
        response = client.post("/api/tasks", json=task_body(project_id, description=description),
                               headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: description"
        listing = client.get("/api/tasks", headers=auth_headers).json()
        assert listing["pagination"]["total"] == 0

    def test_create_task_invalid_enum(self, client, auth_headers, project_id):
        response = client.post("/api/tasks", json=task_body(project_id, priority="urgent"), headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid value for priority"

    def test_create_task_unknown_assignee_commits_nothing(self, client, auth_headers, project_id, staff_id):
        """Test a task with an unknown assignee is rejected and not stored."""
        response = client.post(
            "/api/tasks",
            json=task_body(project_id, assignees=[{"user": staff_id}, {"user": staff_id + 100}]),
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "One or more assignees not found"
        listing = client.get("/api/tasks", headers=auth_headers).json()
        assert listing["pagination"]["total"] == 0

    def test_create_task_unknown_project(self, client, auth_headers):
        response = client.post("/api/tasks", json=task_body(999), headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Project not found"

    def test_get_task(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.get(f"/api/tasks/{task['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["task"]["name"] == "Pour foundation slab"

    def test_get_missing_task(self, client, auth_headers):
        response = client.get("/api/tasks/4040", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Task not found"}

    def test_update_task(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.put(
            f"/api/tasks/{task['id']}",
            json={"percentageComplete": 40, "status": "in_progress"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        updated = response.json()["task"]
        assert updated["percentageComplete"] == 40
        assert updated["status"] == "in_progress"
        assert updated["name"] == task["name"]
        assert len(updated["statusHistory"]) == 1

    def test_update_cannot_change_project(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.put(f"/api/tasks/{task['id']}", json={"project": project_id + 1}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Project cannot be changed"

    def test_delete_task(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.delete(f"/api/tasks/{task['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Task deleted successfully"}
        assert client.get(f"/api/tasks/{task['id']}", headers=auth_headers).status_code == 404


class TestTaskLifecycleEndpoints:
    """Test cases for status, comments, issues and checklist."""

    def test_update_status(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.patch(
            f"/api/tasks/{task['id']}/status",
            json={"status": "completed", "reason": "Inspection passed"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        updated = response.json()["task"]
        assert updated["status"] == "completed"
        assert updated["completedDate"] is not None
        assert updated["percentageComplete"] == 100
        assert updated["statusHistory"][0]["changedBy"] == "user-123"
        assert updated["statusHistory"][0]["reason"] == "Inspection passed"

    def test_update_status_requires_status(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.patch(f"/api/tasks/{task['id']}/status", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Status is required"

    def test_update_status_invalid_value(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.patch(f"/api/tasks/{task['id']}/status", json={"status": "done"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid value for status"

    def test_add_comment(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.post(
            f"/api/tasks/{task['id']}/comments",
            json={"content": "Concrete truck arrives at 7am"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        comment = response.json()["comment"]
        assert comment["content"] == "Concrete truck arrives at 7am"
        assert comment["user"] == "user-123"

    def test_report_issue(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.post(
            f"/api/tasks/{task['id']}/issues",
            json={"title": "Crack in formwork", "severity": "critical"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        issue = response.json()["issue"]
        assert issue["status"] == "open"
        assert issue["severity"] == "critical"
        assert issue["reportedBy"] == "user-123"

    def test_update_checklist_item(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id, checklist=[{"item": "Check rebar spacing"}])
        item_id = task["checklist"][0]["id"]

        response = client.patch(
            f"/api/tasks/{task['id']}/checklist/{item_id}",
            json={"completed": True, "notes": "Spacing OK"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        item = response.json()["checklistItem"]
        assert item["completed"] is True
        assert item["completedBy"] == "user-123"

    def test_update_missing_checklist_item(self, client, auth_headers, project_id):
        task = create_task(client, auth_headers, project_id)

        response = client.patch(
            f"/api/tasks/{task['id']}/checklist/nope",
            json={"completed": True},
            headers=auth_headers,
        )

        assert response.status_code == 404


class TestTaskQueryEndpoints:
    """Test cases for listing and analytics."""

    def test_list_with_search_and_pagination(self, client, auth_headers, project_id):
        for index in range(12):
            create_task(client, auth_headers, project_id, name=f"Foundation pour {index}")
        create_task(client, auth_headers, project_id, name="Paint facade", description="Two coats")

        response = client.get("/api/tasks?search=FOUNDATION&limit=5&page=3&sortBy=name&sortOrder=asc",
                              headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"] == {"current": 3, "pages": 3, "total": 12}
        assert len(body["tasks"]) == 2

    def test_list_filters_by_assignee(self, client, auth_headers, project_id, staff_id):
        create_task(client, auth_headers, project_id, assignees=[{"user": staff_id}])
        create_task(client, auth_headers, project_id, name="Unassigned work")

        response = client.get(f"/api/tasks?assignee={staff_id}", headers=auth_headers)

        assert [task["name"] for task in response.json()["tasks"]] == ["Pour foundation slab"]

    def test_list_ignores_blank_filters(self, client, auth_headers, project_id):
        """Test cleared filters are sent as empty values and match everything."""
        create_task(client, auth_headers, project_id)
        create_task(client, auth_headers, project_id, name="Frame walls")

        response = client.get(
            "/api/tasks?status=&project=&assignee=&priority=&category=&search=&startDate=&endDate=",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["pagination"]["total"] == 2

    def test_list_still_rejects_bad_filter_values(self, client, auth_headers):
        response = client.get("/api/tasks?project=abc", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid value for project"

    def test_list_rejects_unknown_sort_field(self, client, auth_headers):
        response = client.get("/api/tasks?sortBy=secret", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid value for sortBy"

    def test_analytics(self, client, auth_headers, project_id):
        first = create_task(client, auth_headers, project_id)
        create_task(client, auth_headers, project_id)
        create_task(client, auth_headers, project_id)
        client.patch(f"/api/tasks/{first['id']}/status", json={"status": "completed"}, headers=auth_headers)

        response = client.get(f"/api/tasks/analytics?project={project_id}", headers=auth_headers)

        assert response.status_code == 200
        analytics = response.json()
        assert analytics["totalTasks"] == 3
        assert analytics["completedTasks"] == 1
        assert analytics["notStartedTasks"] == 2
        assert analytics["completionRate"] == 33.33
        assert analytics["overdueTasks"] == 2

    def test_analytics_ignores_blank_filters(self, client, auth_headers, project_id):
        create_task(client, auth_headers, project_id)

        response = client.get("/api/tasks/analytics?project=&startDate=&endDate=", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["totalTasks"] == 1
