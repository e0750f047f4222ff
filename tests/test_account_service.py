"""Tests unitaires pour AccountService."""

import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping

import pytest

from domain.entities import (
    DEFAULT, REQUIRED_FIELDS, UserAccount, UserProfile, OrgAccount, OrgProfile, UserOrgAssociation,
    UserProfileField, OrgProfileField, normalize_updates
)
from domain.exceptions import (
    AuthError, AuthorizationError, NotFoundError, PersistenceError,
    ValidationError, WorkflowCancelledError
)
from domain.repositories.account_repository import AccountRepository
from application.services.account_service import AccountService
from infrastructure.security.password_hasher import PasswordHasher


class InMemoryAccountRepository(AccountRepository):
    """Implémentation en mémoire d'AccountRepository pour les tests."""

    def __init__(self, password_hasher: PasswordHasher, fail_on: Iterable[str] = ()) -> None:
        self.password_hasher = password_hasher
        self.fail_on = set(fail_on)
        self.calls: List[str] = []
        self.accounts: Dict[str, UserAccount] = {}
        self.profiles: Dict[str, UserProfile] = {}
        self.orgs: Dict[str, OrgAccount] = {}
        self.org_profiles: Dict[str, OrgProfile] = {}
        self.associations: List[UserOrgAssociation] = []

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PersistenceError(f"{operation} failed")

    @staticmethod
    def _apply(target: Any, updates: Mapping[Any, Any]) -> None:
        # Colonnes NOT NULL sans valeur par défaut : rejet avant toute écriture
        for field, value in updates.items():
            if value == DEFAULT and field in REQUIRED_FIELDS:
                raise PersistenceError("unable to update user profile")
        for field, value in updates.items():
            if value == DEFAULT:
                value = datetime.now(timezone.utc) if field == UserProfileField.LAST_LOGIN else None
            setattr(target, field.value, value)

    def create_user_account(self, account: UserAccount) -> None:
        self._record("create_user_account")
        if any(a.username == account.username for a in self.accounts.values()):
            raise PersistenceError("error saving user account")
        account.joined_on = datetime.now(timezone.utc)
        self.accounts[account.id] = account

    def delete_user_account(self, account_id: str) -> None:
        self._record("delete_user_account")
        self.accounts.pop(account_id, None)
        # Cascade comme la base de données
        self.profiles.pop(account_id, None)
        self.associations = [a for a in self.associations if a.user_id != account_id]

    def get_user_account(self, account_id: str) -> UserAccount:
        self._record("get_user_account")
        if account_id not in self.accounts:
            raise NotFoundError("User account", account_id)
        return self.accounts[account_id]

    def get_account_by_credentials(self, username: str, password: str) -> UserAccount:
        self._record("get_account_by_credentials")
        account = next((a for a in self.accounts.values() if a.username == username), None)
        if not account or not self.password_hasher.verify(password, account.hashed_password):
            raise AuthError("Invalid credentials")
        return account

    def create_user_profile(self, profile: UserProfile) -> None:
        self._record("create_user_profile")
        self.profiles[profile.account_id] = profile

    def get_user_profile(self, account_id: str) -> UserProfile:
        self._record("get_user_profile")
        if account_id not in self.profiles:
            raise NotFoundError("User profile", account_id)
        return self.profiles[account_id]

    def update_user_profile(self, account_id: str, updates: Mapping[str, Any]) -> None:
        self._record("update_user_profile")
        normalized = normalize_updates(updates, UserProfileField)
        if normalized:
            self._apply(self.get_user_profile(account_id), normalized)

    def create_org_account(self, org: OrgAccount) -> None:
        self._record("create_org_account")
        self.orgs[org.id] = org

    def delete_org_account(self, org_id: str) -> None:
        self._record("delete_org_account")
        self.orgs.pop(org_id, None)
        self.org_profiles.pop(org_id, None)

    def get_org_account(self, org_id: str) -> OrgAccount:
        self._record("get_org_account")
        if org_id not in self.orgs:
            raise NotFoundError("Organization account", org_id)
        return self.orgs[org_id]

    def create_org_profile(self, profile: OrgProfile) -> None:
        self._record("create_org_profile")
        self.org_profiles[profile.account_id] = profile

    def get_org_profile(self, org_id: str) -> OrgProfile:
        self._record("get_org_profile")
        if org_id not in self.org_profiles:
            raise NotFoundError("Organization profile", org_id)
        return self.org_profiles[org_id]

    def update_org_profile(self, org_id: str, updates: Mapping[str, Any]) -> None:
        self._record("update_org_profile")
        normalized = normalize_updates(updates, OrgProfileField)
        if normalized:
            self._apply(self.get_org_profile(org_id), normalized)

    def associate_user_to_org(self, user_id: str, org_id: str) -> None:
        self._record("associate_user_to_org")
        if org_id not in self.orgs:
            raise PersistenceError("error associating user to organization")
        self.associations.append(UserOrgAssociation(user_id=user_id, org_id=org_id))

    def confirm_user_to_org_association(self, user_id: str, org_id: str) -> None:
        self._record("confirm_user_to_org_association")
        if not any(a.user_id == user_id and a.org_id == org_id for a in self.associations):
            raise AuthorizationError("user not associated to organization")


@pytest.fixture()
def hasher():
    return PasswordHasher()


def make_service(hasher: PasswordHasher, fail_on: Iterable[str] = ()):
    repo = InMemoryAccountRepository(hasher, fail_on=fail_on)
    return AccountService(repo, hasher), repo


def create_org(service: AccountService) -> str:
    return service.create_org("Acme", "provider", "555-0100", "1 Main St", "UTC", "acme.example")


def create_alice(service: AccountService, org_id: str) -> str:
    return service.create_user(
        org_id, "alice", "s3cret", "provider", "Alice", "Martin",
        email="alice@example.com", phone="555-0101"
    )


# ============================================================================
# CreateUser
# ============================================================================

def test_create_user_then_get_account(hasher):
    service, repo = make_service(hasher)
    org_id = create_org(service)

    account_id = create_alice(service, org_id)
    other_id = service.create_user(org_id, "bob", "pw", "payor", "Bob", "Durand")

    account = service.get_user_account(account_id)
    assert account.id == account_id
    assert account.username == "alice"
    assert account.org_type == "provider"
    assert account_id and other_id and account_id != other_id


def test_create_user_stores_hashed_password(hasher):
    service, repo = make_service(hasher)
    account_id = create_alice(service, create_org(service))

    stored = repo.accounts[account_id].hashed_password
    assert stored != "s3cret"
    assert hasher.verify("s3cret", stored)


def test_create_user_profile_failure_removes_account(hasher):
    service, repo = make_service(hasher, fail_on={"create_user_profile"})
    org_id = create_org(service)

    with pytest.raises(PersistenceError) as exc_info:
        create_alice(service, org_id)

    assert "create_user_profile failed" in str(exc_info.value)
    assert repo.accounts == {}
    assert repo.calls.count("delete_user_account") == 1


def test_create_user_association_failure_removes_account(hasher):
    service, repo = make_service(hasher)

    with pytest.raises(PersistenceError):
        create_alice(service, "unknown-org")

    assert repo.accounts == {}
    assert repo.calls.count("delete_user_account") == 1
    assert repo.profiles == {}


def test_compensation_failure_does_not_mask_original_error(hasher):
    service, repo = make_service(hasher, fail_on={"create_user_profile", "delete_user_account"})
    org_id = create_org(service)

    with pytest.raises(PersistenceError) as exc_info:
        create_alice(service, org_id)

    assert "create_user_profile failed" in str(exc_info.value)


def test_create_user_account_failure_does_not_compensate(hasher):
    service, repo = make_service(hasher, fail_on={"create_user_account"})

    with pytest.raises(PersistenceError):
        create_alice(service, "org")

    assert "delete_user_account" not in repo.calls


def test_create_user_rejects_missing_input_before_any_write(hasher):
    service, repo = make_service(hasher)

    with pytest.raises(ValidationError):
        service.create_user("org", "", "pw", None, "A", "B")
    with pytest.raises(ValidationError):
        service.create_user("org", "carol", "", None, "A", "B")
    with pytest.raises(ValidationError):
        service.create_user("org", "carol", "pw", None, "", "B")

    assert repo.calls == []


def test_create_user_cancelled_before_first_step(hasher):
    service, repo = make_service(hasher)
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(WorkflowCancelledError):
        service.create_user("org", "carol", "pw", None, "Carol", "C", cancel_event=cancel)

    assert repo.calls == []


def test_create_user_cancelled_after_account_is_compensated(hasher):
    cancel = threading.Event()

    class CancellingRepository(InMemoryAccountRepository):
        def create_user_account(self, account):
            super().create_user_account(account)
            cancel.set()

    repo = CancellingRepository(hasher)
    service = AccountService(repo, hasher)

    with pytest.raises(WorkflowCancelledError):
        service.create_user("org", "carol", "pw", None, "Carol", "C", cancel_event=cancel)

    assert repo.accounts == {}
    assert "create_user_profile" not in repo.calls

# ============================================================================
# Login
# ============================================================================

def test_login_success_updates_last_login(hasher):
    service, repo = make_service(hasher)
    org_id = create_org(service)
    account_id = create_alice(service, org_id)
    assert repo.profiles[account_id].last_login is None

    detailed = service.login(org_id, "alice", "s3cret")

    assert detailed.account.id == account_id
    assert detailed.profile.first_name == "Alice"
    assert detailed.profile.last_login is not None
    assert detailed.org.name == "Acme"


def test_login_unknown_user_and_wrong_password_are_indistinguishable(hasher):
    service, repo = make_service(hasher)
    org_id = create_org(service)
    create_alice(service, org_id)

    with pytest.raises(AuthError) as unknown:
        service.login(org_id, "nobody", "s3cret")
    with pytest.raises(AuthError) as wrong:
        service.login(org_id, "alice", "wrong")

    assert str(unknown.value) == str(wrong.value)


def test_login_without_association_is_rejected(hasher):
    service, repo = make_service(hasher)
    org_id = create_org(service)
    other_org = service.create_org("Other", "payor")
    create_alice(service, org_id)

    with pytest.raises(AuthorizationError):
        service.login(other_org, "alice", "s3cret")

    assert "update_user_profile" not in repo.calls


def test_login_fails_when_last_login_update_fails(hasher):
    service, repo = make_service(hasher)
    org_id = create_org(service)
    create_alice(service, org_id)
    repo.fail_on.add("update_user_profile")

    with pytest.raises(PersistenceError):
        service.login(org_id, "alice", "s3cret")

# ============================================================================
# Profil, suppression, organisations
# ============================================================================

def test_update_profile_skips_none_values(hasher):
    service, repo = make_service(hasher)
    account_id = create_alice(service, create_org(service))

    service.update_user_profile(account_id, {"email": None, "phone": "555-9999"})

    profile = repo.profiles[account_id]
    assert profile.email == "alice@example.com"
    assert profile.phone == "555-9999"


def test_update_profile_rejects_unknown_field(hasher):
    service, repo = make_service(hasher)
    account_id = create_alice(service, create_org(service))

    with pytest.raises(ValidationError):
        service.update_user_profile(account_id, {"password": "x"})


def test_update_required_field_to_default_is_persistence_error(hasher):
    service, repo = make_service(hasher)
    account_id = create_alice(service, create_org(service))

    with pytest.raises(PersistenceError):
        service.update_user_profile(account_id, {"first_name": DEFAULT, "phone": "555-9999"})

    profile = repo.profiles[account_id]
    assert profile.first_name == "Alice"
    assert profile.phone == "555-0101"


def test_delete_user_account_twice_does_not_fail(hasher):
    service, repo = make_service(hasher)
    account_id = create_alice(service, create_org(service))

    service.delete_user_account(account_id)
    service.delete_user_account(account_id)

    with pytest.raises(NotFoundError):
        service.get_user_account(account_id)


def test_create_org_round_trip(hasher):
    service, repo = make_service(hasher)

    org_id = create_org(service)

    org = service.get_org_account(org_id)
    assert org.name == "Acme"
    assert org.type == "provider"
    detailed = service.get_org(org_id)
    assert detailed.profile.website == "acme.example"
    assert detailed.profile.timezone == "UTC"


def test_create_org_profile_failure_removes_org(hasher):
    service, repo = make_service(hasher, fail_on={"create_org_profile"})

    with pytest.raises(PersistenceError):
        create_org(service)

    assert repo.orgs == {}
    assert repo.calls.count("delete_org_account") == 1


def test_update_org_profile(hasher):
    service, repo = make_service(hasher)
    org_id = create_org(service)

    service.update_org_profile(org_id, {"address": "2 Side St", "website": None})

    profile = service.get_org(org_id).profile
    assert profile.address == "2 Side St"
    assert profile.website == "acme.example"
