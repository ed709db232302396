"""
Tests for the authentication service against a real (SQLite) user store.
"""
import pytest

from frontdesk.auth.exceptions import (
    AccountDeactivatedException,
    EmailAlreadyExistsException,
    IncorrectPasswordException,
    InvalidCredentialsException,
    InvalidResetTokenException,
    InvalidRoleException,
    InvalidTokenException,
    UserNotFoundException,
    WeakPasswordException,
)
from frontdesk.auth.models import User, UserRole


def _login_failure(auth_service, email, password):
    with pytest.raises(InvalidCredentialsException) as exc_info:
        auth_service.login(email, password)
    return exc_info.value


def test_login_returns_token_and_user(auth_service, tokens, front_desk):
    token, user = auth_service.login("desk@clinic.com", "password123")
    assert user.id == front_desk.id
    assert user.role == UserRole.FRONT_DESK
    assert not hasattr(user, "password_hash")
    claims = tokens.validate_session(token)
    assert claims.user_id == front_desk.id
    assert claims.role == "front-desk"


def test_login_failures_are_indistinguishable(auth_service, make_user):
    make_user("active@clinic.com")
    make_user("inactive@clinic.com", is_active=False)

    unknown = _login_failure(auth_service, "nobody@clinic.com", "password123")
    wrong = _login_failure(auth_service, "active@clinic.com", "wrong-password")
    inactive = _login_failure(auth_service, "inactive@clinic.com", "password123")

    assert unknown.status_code == wrong.status_code == inactive.status_code == 401
    assert unknown.detail == wrong.detail == inactive.detail


def test_login_email_lookup_is_exact(auth_service, front_desk):
    _login_failure(auth_service, "DESK@clinic.com", "password123")


def test_register_creates_active_account(auth_service, users, hasher):
    user = auth_service.register("new@clinic.com", "secret1", "New Person", "clinician")
    assert user.is_active
    assert user.role == UserRole.CLINICIAN
    stored = users.find_by_email("new@clinic.com")
    assert stored.password_hash != "secret1"
    assert hasher.verify(stored.password_hash, "secret1")


def test_register_duplicate_email_is_conflict(auth_service, make_user):
    make_user("taken@clinic.com", is_active=False)
    with pytest.raises(EmailAlreadyExistsException) as exc_info:
        auth_service.register("taken@clinic.com", "secret1", "Someone", "front-desk")
    assert exc_info.value.status_code == 409


def test_register_duplicate_is_checked_before_role(auth_service, front_desk):
    with pytest.raises(EmailAlreadyExistsException):
        auth_service.register(front_desk.email, "secret1", "Someone", "nurse")


def test_register_rejects_unknown_role(auth_service, db):
    with pytest.raises(InvalidRoleException):
        auth_service.register("nurse@clinic.com", "secret1", "Nurse", "nurse")
    assert db.query(User).count() == 0


def test_validate_token_requires_existing_active_user(auth_service, tokens, db, front_desk):
    token = tokens.issue_session(front_desk.id, front_desk.email, "front-desk")
    claims, user = auth_service.validate_token(token)
    assert user.id == front_desk.id

    front_desk.is_active = False
    db.commit()
    with pytest.raises(AccountDeactivatedException):
        auth_service.validate_token(token)

    ghost = tokens.issue_session(999, "ghost@clinic.com", "front-desk")
    with pytest.raises(InvalidTokenException):
        auth_service.validate_token(ghost)


def test_refresh_token_issues_fresh_token(auth_service, tokens, clinician):
    token = auth_service.refresh_token(clinician.id)
    claims = tokens.validate_session(token)
    assert claims.user_id == clinician.id
    assert claims.role == "clinician"


def test_refresh_token_for_missing_or_inactive_user(auth_service, make_user):
    with pytest.raises(UserNotFoundException):
        auth_service.refresh_token(12345)
    inactive = make_user("gone@clinic.com", is_active=False)
    with pytest.raises(AccountDeactivatedException):
        auth_service.refresh_token(inactive.id)


def test_change_password(auth_service, front_desk):
    auth_service.change_password(front_desk.id, "password123", "brand-new-pass")
    auth_service.login(front_desk.email, "brand-new-pass")
    _login_failure(auth_service, front_desk.email, "password123")


def test_change_password_checks_current_password(auth_service, front_desk):
    with pytest.raises(IncorrectPasswordException):
        auth_service.change_password(front_desk.id, "not-it", "brand-new-pass")


def test_change_password_rejects_short_password(auth_service, front_desk):
    with pytest.raises(WeakPasswordException) as exc_info:
        auth_service.change_password(front_desk.id, "password123", "12345")
    assert "6" in exc_info.value.detail
    auth_service.login(front_desk.email, "password123")


def test_change_password_for_missing_user(auth_service):
    with pytest.raises(UserNotFoundException):
        auth_service.change_password(999, "password123", "brand-new-pass")


def test_reset_password_is_silent_for_unknown_or_inactive(auth_service, make_user):
    make_user("inactive@clinic.com", is_active=False)
    assert auth_service.reset_password("nobody@clinic.com") is None
    assert auth_service.reset_password("inactive@clinic.com") is None


def test_reset_flow(auth_service, front_desk):
    token = auth_service.reset_password(front_desk.email)
    assert token

    user = auth_service.verify_reset_token(token)
    assert user.id == front_desk.id

    auth_service.update_password(user.id, "after-reset")
    auth_service.login(front_desk.email, "after-reset")


def test_session_token_is_not_a_reset_token(auth_service, tokens, front_desk):
    session_token = tokens.issue_session(front_desk.id, front_desk.email, "front-desk")
    with pytest.raises(InvalidResetTokenException):
        auth_service.verify_reset_token(session_token)


def test_reset_token_for_deactivated_user_is_rejected(auth_service, db, front_desk):
    token = auth_service.reset_password(front_desk.email)
    front_desk.is_active = False
    db.commit()
    with pytest.raises(InvalidResetTokenException):
        auth_service.verify_reset_token(token)


def test_update_password_rejects_short_password(auth_service, front_desk):
    with pytest.raises(WeakPasswordException):
        auth_service.update_password(front_desk.id, "short")
