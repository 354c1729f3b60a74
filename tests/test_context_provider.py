"""Tests for module detection, context summaries and role permissions."""

import pytest

from memora_assistant.context.provider import (
    AllowAllPolicy,
    RolePermissionPolicy,
    build_context_summary,
    detect_current_module,
)
from memora_assistant.schemas.intent import IntentAction


class TestDetectCurrentModule:
    @pytest.mark.parametrize("path,module", [
        ("/hub/g1", "dashboard"),
        ("/hub/g1/projects", "project"),
        ("/hub/projects-team/tasks", "task"),
        ("/hub/g1/recruitment/offers/3", "recruitment"),
        ("/settings/security", "settings"),
        ("/admin/access", "admin"),
    ])
    def test_known_paths(self, path, module):
        assert detect_current_module(path).module == module

    @pytest.mark.parametrize("path", [None, "", "/", "/login"])
    def test_unknown_paths(self, path):
        assert detect_current_module(path) is None


class TestContextSummary:
    def test_full_summary(self, make_context):
        context = make_context(
            current_page="/hub/g1/projects",
            admin_mode=True,
            active_project_name="Refonte",
            current_user_role="Manager",
        )
        assert build_context_summary(context) == (
            "Page actuelle : Projets | Groupe : Alpha | Utilisateur : Sophie | Role : Manager"
            " | Mode admin actif | Projet actif : Refonte"
        )

    def test_empty_context(self, make_context):
        context = make_context(
            current_page="/", current_group_name=None, current_user_name=None, current_user_role=None,
        )
        assert build_context_summary(context) == ""


class TestRolePermissionPolicy:
    @pytest.fixture
    def policy(self):
        return RolePermissionPolicy()

    @pytest.mark.parametrize("role", ["Owner", "Admin"])
    def test_owner_and_admin_may_do_everything(self, policy, make_context, role):
        context = make_context(current_user_role=role)
        assert all(policy.has_permission_for_action(context, a.value) for a in IntentAction)

    def test_manager_restrictions(self, policy, make_context):
        context = make_context(current_user_role="Manager")
        assert policy.has_permission_for_action(context, "create_project")
        assert not policy.has_permission_for_action(context, "list_users")
        assert not policy.has_permission_for_action(context, "toggle_admin_mode")

    def test_collaborator_allowlist(self, policy, make_context):
        context = make_context(current_user_role="Collaborator")
        assert policy.has_permission_for_action(context, "create_task")
        assert policy.has_permission_for_action(context, IntentAction.REQUEST_ABSENCE)
        assert not policy.has_permission_for_action(context, "create_project")
        assert not policy.has_permission_for_action(context, "approve_absence")

    def test_guest_allowlist(self, policy, make_context):
        context = make_context(current_user_role="Guest")
        assert policy.has_permission_for_action(context, "navigate_to")
        assert not policy.has_permission_for_action(context, "create_task")

    @pytest.mark.parametrize("role", [None, "Intern"])
    def test_missing_or_unknown_role_gets_nothing(self, policy, make_context, role):
        context = make_context(current_user_role=role)
        assert not policy.has_permission_for_action(context, "greet")

    def test_explicit_permissions_win(self, policy, make_context):
        context = make_context(current_user_role="Owner", permissions=frozenset({"greet"}))
        assert policy.has_permission_for_action(context, "greet")
        assert not policy.has_permission_for_action(context, "create_task")


class TestAllowAllPolicy:
    def test_grants_everything(self, make_context):
        context = make_context(current_user_role=None)
        assert AllowAllPolicy().has_permission_for_action(context, "toggle_admin_mode")
