"""
API tests for the project and staff endpoints.
"""


class TestProjectEndpoints:
    """Test cases for project CRUD over HTTP."""

    def test_create_and_get_project(self, client, auth_headers):
        created = client.post("/api/projects", json={"name": "Canal Bridge", "budget": 1500000},
                              headers=auth_headers)

        assert created.status_code == 201
        project = created.json()["project"]
        assert project["status"] == "Planning"
        assert project["currency"] == "LKR"

        response = client.get(f"/api/projects/{project['id']}", headers=auth_headers)
        assert response.json()["project"]["name"] == "Canal Bridge"

    def test_list_projects(self, client, auth_headers):
        client.post("/api/projects", json={"name": "Canal Bridge"}, headers=auth_headers)
        client.post("/api/projects", json={"name": "Harbour Tower"}, headers=auth_headers)

        response = client.get("/api/projects?search=harbour", headers=auth_headers)

        body = response.json()
        assert body["pagination"]["total"] == 1
        assert body["projects"][0]["name"] == "Harbour Tower"

    def test_update_project(self, client, auth_headers):
        project = client.post("/api/projects", json={"name": "Canal Bridge"}, headers=auth_headers).json()["project"]

        response = client.put(f"/api/projects/{project['id']}", json={"status": "In Progress", "progress": 15},
                              headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["project"]["status"] == "In Progress"
        assert response.json()["project"]["progress"] == 15

    def test_delete_project_with_tasks_conflicts(self, client, auth_headers):
        project = client.post("/api/projects", json={"name": "Canal Bridge"}, headers=auth_headers).json()["project"]
        client.post("/api/tasks", json={
            "name": "Drive piles",
            "description": "Twelve piles on the north bank",
            "project": project["id"],
            "startDate": "2026-04-01T08:00:00Z",
            "endDate": "2026-04-20T17:00:00Z",
            "category": "construction",
            "priority": "medium",
        }, headers=auth_headers)

        response = client.delete(f"/api/projects/{project['id']}", headers=auth_headers)

        assert response.status_code == 409

    def test_delete_empty_project(self, client, auth_headers):
        project = client.post("/api/projects", json={"name": "Canal Bridge"}, headers=auth_headers).json()["project"]

        response = client.delete(f"/api/projects/{project['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert client.get(f"/api/projects/{project['id']}", headers=auth_headers).status_code == 404


class TestStaffEndpoints:
    """Test cases for the staff directory over HTTP."""

    def test_duplicate_email(self, client, auth_headers):
        client.post("/api/staff", json={"name": "Nimal Perera", "email": "nimal@example.com"}, headers=auth_headers)

        response = client.post("/api/staff", json={"name": "Nimal P", "email": "nimal@example.com"},
                               headers=auth_headers)

        assert response.status_code == 400

    def test_assignee_options_only_active(self, client, auth_headers):
        client.post("/api/staff", json={"name": "Zara Fernando", "email": "zara@example.com"}, headers=auth_headers)
        client.post("/api/staff", json={"name": "Kamal Dias", "email": "kamal@example.com", "isActive": False},
                    headers=auth_headers)

        response = client.get("/api/staff/assignees", headers=auth_headers)

        assert response.status_code == 200
        assert [option["name"] for option in response.json()["staff"]] == ["Zara Fernando"]

    def test_delete_assigned_staff_conflicts(self, client, auth_headers):
        project = client.post("/api/projects", json={"name": "Canal Bridge"}, headers=auth_headers).json()["project"]
        staff = client.post("/api/staff", json={"name": "Nimal Perera", "email": "nimal@example.com"},
                            headers=auth_headers).json()["staff"]
        client.post("/api/tasks", json={
            "name": "Drive piles",
            "description": "Twelve piles on the north bank",
            "project": project["id"],
            "startDate": "2026-04-01T08:00:00Z",
            "endDate": "2026-04-20T17:00:00Z",
            "category": "construction",
            "priority": "medium",
            "assignees": [{"user": staff["id"]}],
        }, headers=auth_headers)

        response = client.delete(f"/api/staff/{staff['id']}", headers=auth_headers)

        assert response.status_code == 409


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert "timestamp" in body
