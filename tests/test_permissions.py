"""Tests for the ownership guard and the post read rule."""

import uuid
from types import SimpleNamespace

import pytest

from bloghub.core.exceptions import AuthorizationError, NotFoundError
from bloghub.core.permissions import Action, Decision, authorize, can_view_post, enforce

OWNER = uuid.uuid4()
OTHER = uuid.uuid4()


class TestAuthorize:
    """Owner/admin rules per action"""

    @pytest.mark.parametrize("action", list(Action))
    def test_owner_is_allowed(self, action):
        assert authorize(OWNER, "user", OWNER, action) is Decision.ALLOW

    @pytest.mark.parametrize("action", list(Action))
    def test_stranger_is_forbidden(self, action):
        assert authorize(OTHER, "user", OWNER, action) is Decision.FORBIDDEN

    @pytest.mark.parametrize("action", [Action.UPDATE_POST, Action.DELETE_POST, Action.DELETE_COMMENT])
    def test_admin_overrides(self, action):
        assert authorize(OTHER, "admin", OWNER, action) is Decision.ALLOW

    def test_admin_cannot_update_someone_elses_comment(self):
        assert authorize(OTHER, "admin", OWNER, Action.UPDATE_COMMENT) is Decision.FORBIDDEN

    def test_admin_can_update_own_comment(self):
        assert authorize(OWNER, "admin", OWNER, Action.UPDATE_COMMENT) is Decision.ALLOW

    def test_missing_resource_is_not_found_even_for_admin(self):
        assert authorize(OTHER, "admin", None, Action.DELETE_POST) is Decision.NOT_FOUND


class TestEnforce:
    def test_allow_passes(self):
        enforce(Decision.ALLOW, "nope")

    def test_forbidden_raises_403(self):
        with pytest.raises(AuthorizationError) as exc:
            enforce(Decision.FORBIDDEN, "Not authorized to update this post")
        assert exc.value.status_code == 403
        assert exc.value.message == "Not authorized to update this post"

    def test_not_found_raises_404(self):
        with pytest.raises(NotFoundError) as exc:
            enforce(Decision.NOT_FOUND, "nope", "Post not found")
        assert exc.value.status_code == 404
        assert exc.value.message == "Post not found"


class TestCanViewPost:
    """Published posts are public, drafts belong to their author"""

    def _post(self, published):
        return SimpleNamespace(is_published=published, author_id=OWNER)

    def test_published_is_public(self):
        assert can_view_post(self._post(True), None)

    def test_draft_visible_to_author(self):
        assert can_view_post(self._post(False), SimpleNamespace(id=OWNER, role="user"))

    def test_draft_hidden_from_anonymous(self):
        assert not can_view_post(self._post(False), None)

    def test_draft_hidden_from_other_user(self):
        assert not can_view_post(self._post(False), SimpleNamespace(id=OTHER, role="user"))

    def test_draft_hidden_from_admin(self):
        assert not can_view_post(self._post(False), SimpleNamespace(id=OTHER, role="admin"))
