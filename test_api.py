"""End-to-end checks of the API surface"""

from conftest import register


def test_root_and_health(client):
    assert client.get("/").json() == {"message": "Task Tracker API"}

    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_unknown_route_is_404(client):
    assert client.get("/api/nope").status_code == 404


def test_admin_assigns_and_employee_completes(client, admin, employee):
    response = client.post(
        "/api/tasks",
        json={
            "title": "Fix bug",
            "description": "The login form crashes on submit",
            "assignedTo": employee["user"]["id"],
            "dueDate": "2024-02-10",
        },
        headers=admin["headers"],
    )
    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "Pending"
    assert task["assignedTo"]["id"] == employee["user"]["id"]
    assert task["assignedTo"]["name"] == "John Doe"

    # The employee sees exactly this task
    listing = client.get("/api/tasks", headers=employee["headers"]).json()
    assert [t["id"] for t in listing["tasks"]] == [task["id"]]

    response = client.put(
        f"/api/tasks/{task['id']}",
        json={"status": "Completed"},
        headers=employee["headers"],
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Completed"

    listing = client.get("/api/tasks", headers=admin["headers"]).json()
    assert listing["tasks"][0]["status"] == "Completed"


def test_admin_registers_employee_then_employee_logs_in(client, admin):
    register(client, "New Hire", "new.hire@example.com", "employee", password="welcome1")

    employees = client.get("/api/tasks/users", headers=admin["headers"]).json()
    assert [e["email"] for e in employees] == ["new.hire@example.com"]

    response = client.post("/api/auth/login", json={"email": "new.hire@example.com", "password": "welcome1"})
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "employee"
