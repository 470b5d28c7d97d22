"""
Unit tests for presentation helpers (labels, filters, roles, hiring flags).
"""

from __future__ import annotations

import pytest

from core.domain.models import (
    Milestone,
    Project,
    ProjectMaterial,
    User,
    UserType,
    WorkerRequest,
)
from core.services.project_views import (
    filter_projects,
    format_date,
    format_money,
    hiring_candidates,
    home_area,
    is_milestone_completed,
    milestone_status_label,
    ordered_quantity,
    pending_count,
    project_role,
    project_status_label,
    request_status_label,
)


class TestLabels:
    @pytest.mark.parametrize(
        "status, label",
        [
            ("planning", "Planning"),
            ("in_progress", "In Progress"),
            ("completed", "Completed"),
            ("cancelled", "Cancelled"),
            ("on_hold", "on_hold"),
            (None, ""),
        ],
    )
    def test_project_status(self, status, label) -> None:
        assert project_status_label(status) == label

    def test_milestone_status_replaces_first_underscore(self) -> None:
        assert milestone_status_label("in_progress") == "in progress"
        assert milestone_status_label("a_b_c") == "a b_c"

    def test_request_status(self) -> None:
        assert request_status_label("accepted") == "Accepted"
        assert request_status_label("withdrawn") == "withdrawn"


class TestProjects:
    def test_filter(self) -> None:
        projects = [Project(id=1, status="planning"), Project(id=2, status="completed")]
        assert filter_projects(projects) == projects
        assert [p.id for p in filter_projects(projects, "completed")] == [2]
        assert filter_projects(projects, "cancelled") == []

    def test_role_needs_engineer_id_and_name(self) -> None:
        assert project_role(Project(civil_engineer_id=3, civil_engineer_name="ravi")) == "Civil Engineer"
        assert project_role(Project(civil_engineer_id=3)) == "Team Member"
        assert project_role(Project(civil_engineer_name="ravi")) == "Team Member"

    def test_ordered_quantity_uses_first_match(self) -> None:
        ordered = [
            ProjectMaterial(material_id=3, quantity=4),
            ProjectMaterial(material_id=3, quantity=9),
            ProjectMaterial(material_id=5, quantity=1),
        ]
        assert ordered_quantity(ordered, 3) == 4
        assert ordered_quantity(ordered, 8) == 0


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-03-05", "Mar 5, 2024"),
            ("2024-12-25T10:30:00Z", "Dec 25, 2024"),
            ("", "Not set"),
            (None, "Not set"),
            ("someday", "someday"),
        ],
    )
    def test_format_date(self, value, expected) -> None:
        assert format_date(value) == expected

    def test_format_money(self) -> None:
        assert format_money(2500000) == "₹2,500,000"
        assert format_money(420.5, "$") == "$420.50"
        assert format_money(None) == "-"


class TestRequestsAndUsers:
    def test_pending_count(self) -> None:
        requests = [
            WorkerRequest(status="pending"),
            WorkerRequest(status="accepted"),
            WorkerRequest(status="pending"),
        ]
        assert pending_count(requests) == 2

    def test_home_area_follows_server_user_type(self) -> None:
        assert home_area(User(user_type="admin")) is UserType.ADMIN
        assert home_area(User(user_type="worker")) is UserType.WORKER
        assert home_area(User(user_type="user")) is UserType.USER
        assert home_area(User()) is UserType.USER

    def test_hiring_candidates_flag_same_project_only(self) -> None:
        users = [User(id=12, username="ravi"), User(id=13, username="meena")]
        sent = [
            WorkerRequest(project_id=7, worker_id=12),
            WorkerRequest(project_id=8, worker_id=13),
        ]

        candidates = hiring_candidates(users, sent, project_id=7)

        assert [(c.user.id, c.request_sent) for c in candidates] == [(12, True), (13, False)]

    def test_milestone_completed(self) -> None:
        assert is_milestone_completed(Milestone(status="completed"))
        assert not is_milestone_completed(Milestone(status="in_progress"))

    def test_null_quantity_counts_as_nothing_ordered(self) -> None:
        assert ordered_quantity([ProjectMaterial(material_id=3, quantity=None)], 3) == 0

    def test_null_statuses(self) -> None:
        assert milestone_status_label(None) == ""
        assert request_status_label(None) == ""
        assert pending_count([WorkerRequest(status=None)]) == 0
        assert not is_milestone_completed(Milestone(status=None))
        assert filter_projects([Project(id=1)], "planning") == []
