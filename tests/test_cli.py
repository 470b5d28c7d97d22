"""
End-to-end CLI tests: Typer commands against the fake backend.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from adapters.token_store import FileTokenStore
from cli import runtime
from cli.main import app

runner = CliRunner()


@pytest.fixture
def cli_backend(backend, monkeypatch):
    """Route every CLI request to `backend` and widen Rich output."""

    monkeypatch.setattr(runtime, "get_transport", backend.transport)
    monkeypatch.setattr(runtime.console, "width", 200)
    monkeypatch.setattr(runtime.err_console, "width", 200)
    return backend


@pytest.fixture
def file_store(settings) -> FileTokenStore:
    return FileTokenStore.from_settings(settings)


class TestSession:
    def test_login_stores_token_and_routes_by_server_role(self, cli_backend, file_store) -> None:
        cli_backend.add(
            "POST",
            "/auth/login",
            {"token": "tok-1", "user": {"id": 1, "username": "ravi", "user_type": "worker"}},
        )

        result = runner.invoke(app, ["login", "-u", "ravi", "-p", "pw", "--as", "user"])

        assert result.exit_code == 0, result.output
        assert "Welcome ravi!" in result.output
        assert "Worker area" in result.output
        assert file_store.get() == "tok-1"

    def test_login_failure_shows_server_message(self, cli_backend, file_store) -> None:
        cli_backend.add("POST", "/auth/login", {"error": "Invalid credentials"}, status=401)

        result = runner.invoke(app, ["login", "-u", "ravi", "-p", "bad"])

        assert result.exit_code == 1
        assert "Login Failed" in result.output
        assert "Invalid credentials" in result.output
        assert file_store.get() is None

    def test_register_validation_sends_nothing(self, cli_backend) -> None:
        result = runner.invoke(
            app,
            ["register", "-u", "ravi", "--email", "nope", "-p", "secret1", "--type", "worker"],
        )

        assert result.exit_code == 2
        assert "Invalid email format" in result.output
        assert cli_backend.requests == []

    def test_register(self, cli_backend) -> None:
        cli_backend.add("POST", "/auth/register", {"message": "created"}, status=201)

        result = runner.invoke(
            app,
            [
                "register", "-u", "ravi", "--email", "ravi@example.com", "-p", "secret1",
                "--type", "worker", "--trade", "electrician",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Registration successful!" in result.output
        body = cli_backend.json_body(cli_backend.last("POST", "/auth/register"))
        assert body["sub_user_type"] == "electrician"

    def test_logout_clears_token(self, cli_backend, file_store) -> None:
        file_store.set("tok")
        result = runner.invoke(app, ["logout"])
        assert result.exit_code == 0
        assert file_store.get() is None

    def test_whoami_sends_bearer(self, cli_backend, file_store) -> None:
        file_store.set("tok-2")
        cli_backend.add("GET", "/auth/me", {"id": 1, "username": "asha", "email": "a@b.co", "user_type": "user"})

        result = runner.invoke(app, ["whoami"])

        assert result.exit_code == 0, result.output
        assert "asha" in result.output
        assert cli_backend.last("GET", "/auth/me").headers["Authorization"] == "Bearer tok-2"

    def test_expired_session_clears_token(self, cli_backend, file_store) -> None:
        file_store.set("old")
        cli_backend.add("GET", "/auth/me", None, status=401)

        result = runner.invoke(app, ["whoami"])

        assert result.exit_code == 1
        assert "Token expired, please login again" in result.output
        assert file_store.get() is None


class TestProjects:
    def test_list_filter_and_export(self, cli_backend, project_payload, tmp_path) -> None:
        other = dict(project_payload, id=8, name="Villa", status="planning")
        cli_backend.add("GET", "/projects", [project_payload, other])
        output = tmp_path / "projects.json"

        result = runner.invoke(
            app, ["projects", "list", "--status", "in_progress", "--worker", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert "Tower" in result.output
        assert "Villa" not in result.output
        assert "Civil Engineer" in result.output
        exported = json.loads(output.read_text(encoding="utf-8"))
        assert [p["id"] for p in exported] == [7]

    def test_fallback_error_message(self, cli_backend) -> None:
        cli_backend.add("GET", "/projects", None, status=500)

        result = runner.invoke(app, ["projects", "list"])

        assert result.exit_code == 1
        assert "Failed to fetch projects" in result.output

    def test_create_requires_name_and_budget(self, cli_backend) -> None:
        result = runner.invoke(app, ["projects", "create", "--name", "Tower"])

        assert result.exit_code == 2
        assert "Name and budget are required" in result.output
        assert cli_backend.requests == []

    def test_create(self, cli_backend, project_payload) -> None:
        cli_backend.add("POST", "/projects", project_payload, status=201)

        result = runner.invoke(app, ["projects", "create", "-n", "Tower", "-b", "2500000"])

        assert result.exit_code == 0, result.output
        assert "Project created successfully" in result.output

    def test_show(self, cli_backend, project_payload) -> None:
        cli_backend.add("GET", "/projects", [project_payload])

        result = runner.invoke(app, ["projects", "show", "7"])

        assert result.exit_code == 0, result.output
        assert "Mar 5, 2024" in result.output
        assert "ravi" in result.output

    def test_delete_requires_confirmation(self, cli_backend) -> None:
        cli_backend.add("DELETE", "/projects/7", None, status=204)

        aborted = runner.invoke(app, ["projects", "delete", "7"], input="n\n")
        assert aborted.exit_code == 1
        assert cli_backend.calls("DELETE", "/projects/7") == 0

        confirmed = runner.invoke(app, ["projects", "delete", "7", "--yes"])
        assert confirmed.exit_code == 0
        assert cli_backend.calls("DELETE", "/projects/7") == 1


class TestMaterials:
    def test_order_over_stock(self, cli_backend, material_payload) -> None:
        cli_backend.add("GET", "/materials", [material_payload])

        result = runner.invoke(app, ["materials", "order", "7", "3", "80"])

        assert result.exit_code == 2
        assert "Quantity exceeds available stock" in result.output

    def test_project_view_shows_ordered(self, cli_backend, material_payload) -> None:
        cli_backend.add("GET", "/materials", [material_payload])
        cli_backend.add("GET", "/materials/project/7", [{"material_id": 3, "quantity": 12}])

        result = runner.invoke(app, ["materials", "project", "7"])

        assert result.exit_code == 0, result.output
        assert "Ordered" in result.output
        assert "12" in result.output

    def test_add_validation(self, cli_backend) -> None:
        result = runner.invoke(app, ["materials", "add", "-n", "Cement", "-u", "bag", "--price", "x"])
        assert result.exit_code == 2
        assert "Valid price per unit is required" in result.output


class TestHiringAndRequests:
    def test_candidates_table(self, cli_backend) -> None:
        cli_backend.add("GET", "/projects/available-engineers", [{"id": 12, "username": "ravi"}])
        cli_backend.add("GET", "/workers/worker_requests", [{"project_id": 7, "worker_id": 12}])

        result = runner.invoke(app, ["hire", "engineers", "7"])

        assert result.exit_code == 0, result.output
        assert "Request Sent" in result.output

    def test_send_uses_server_error(self, cli_backend, planning_project) -> None:
        cli_backend.add("GET", "/projects", [planning_project])
        cli_backend.add("GET", "/workers/worker_requests", [])
        cli_backend.add("POST", "/projects/7/request-worker", {"error": "Worker is busy"}, status=400)

        result = runner.invoke(app, ["hire", "send", "7", "13", "-m", "Join us"])

        assert result.exit_code == 1
        assert "Worker is busy" in result.output

    def test_inbox_and_accept(self, cli_backend) -> None:
        cli_backend.add(
            "GET",
            "/workers/requests",
            [
                {"id": 1, "status": "pending", "project_name": "Tower"},
                {"id": 2, "status": "accepted", "project_name": "Villa"},
            ],
        )
        cli_backend.add("PUT", "/workers/requests/1/respond", {"message": "ok"})

        listing = runner.invoke(app, ["requests", "list"])
        assert listing.exit_code == 0, listing.output
        assert "1 pending requests" in listing.output

        accepted = runner.invoke(app, ["requests", "accept", "1"])
        assert accepted.exit_code == 0, accepted.output
        assert "Request accepted successfully!" in accepted.output


class TestMilestonesAndUsers:
    def test_milestone_add_and_complete(self, cli_backend) -> None:
        cli_backend.add("POST", "/milestones", {"id": 1}, status=201)
        cli_backend.add("PUT", "/milestones/1/complete", {"id": 1})

        added = runner.invoke(app, ["milestones", "add", "7", "-t", "Slab", "--target", "2024-06-01"])
        completed = runner.invoke(app, ["milestones", "complete", "1"])

        assert added.exit_code == 0, added.output
        assert completed.exit_code == 0, completed.output
        assert cli_backend.json_body(cli_backend.last("POST", "/milestones"))["target_date"] == "2024-06-01"

    def test_user_delete(self, cli_backend) -> None:
        cli_backend.add("DELETE", "/auth/users/5", {"message": "deleted"})

        result = runner.invoke(app, ["users", "delete", "5", "-y"])

        assert result.exit_code == 0, result.output
        assert "User deleted successfully" in result.output


class TestDoctor:
    def test_run_reports_connectivity(self, cli_backend, file_store) -> None:
        file_store.set("tok")
        result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0, result.output
        assert "HTTP 404" in result.output
        assert "Token stored" in result.output

    def test_setup_writes_user_env(self, tmp_path) -> None:
        result = runner.invoke(app, ["doctor", "setup"], input="https://build.example/api\n15\n")

        assert result.exit_code == 0, result.output
        env_text = (tmp_path / "config" / "buildlink" / ".env").read_text(encoding="utf-8")
        assert "BUILDLINK_API_URL=https://build.example/api" in env_text
        assert "BUILDLINK_HTTP_TIMEOUT_SECONDS=15" in env_text


class TestBackendQuirks:
    def test_list_with_null_fields_renders(self, cli_backend) -> None:
        cli_backend.add("GET", "/projects", [{"id": 1, "name": None, "budget": 10, "status": None}])

        result = runner.invoke(app, ["projects", "list"])

        assert result.exit_code == 0, result.output
        assert "Projects (1)" in result.output

    def test_mistyped_entity_shows_alert(self, cli_backend) -> None:
        cli_backend.add("GET", "/projects", [{"id": "seven"}])

        result = runner.invoke(app, ["projects", "list"])

        assert result.exit_code == 1
        assert "Unexpected response" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_project_materials_survive_orders_failure(self, cli_backend, material_payload) -> None:
        cli_backend.add("GET", "/materials", [material_payload])
        cli_backend.add("GET", "/materials/project/7", {"error": "boom"}, status=500)

        result = runner.invoke(app, ["materials", "project", "7"])

        assert result.exit_code == 0, result.output
        assert "Cement" in result.output

    def test_hire_refused_outside_planning(self, cli_backend, project_payload) -> None:
        cli_backend.add("GET", "/projects", [dict(project_payload, status="completed")])

        result = runner.invoke(app, ["hire", "send", "7", "3", "-m", "hi"])

        assert result.exit_code == 2
        assert "in planning" in result.output
        assert cli_backend.calls("POST", "/projects/7/request-worker") == 0

    def test_answered_request_cannot_be_answered_again(self, cli_backend) -> None:
        cli_backend.add("GET", "/workers/requests", [{"id": 5, "status": "accepted"}])

        result = runner.invoke(app, ["requests", "reject", "5"])

        assert result.exit_code == 2
        assert "Request already accepted" in result.output
        assert cli_backend.calls("PUT", "/workers/requests/5/respond") == 0
