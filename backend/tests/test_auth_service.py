import asyncio

import pytest

from care_api.exceptions import AccountDisabled, DuplicateEmail, InvalidCredentials, ValidationError
from care_api.models.user import User


@pytest.mark.parametrize(
    "email, password, missing",
    [
        ("a@ubs.test", None, {"password"}),
        ("a@ubs.test", "   ", {"password"}),
        (None, "secret", {"email"}),
        ("  ", "", {"email", "password"}),
    ],
)
async def test_login_requires_both_fields(container, email, password, missing):
    with pytest.raises(ValidationError) as excinfo:
        await container.auth.login(email, password)
    assert set(excinfo.value.details) == missing


async def test_login_unknown_email(container):
    with pytest.raises(InvalidCredentials) as excinfo:
        await container.auth.login("nobody@ubs.test", "whatever")
    assert "email" in excinfo.value.details


async def test_login_wrong_password(container, registered):
    with pytest.raises(InvalidCredentials) as excinfo:
        await container.auth.login("enfermeira@ubs.test", "wrong-password")
    assert excinfo.value.details == {"password": "Incorrect password"}


async def test_login_disabled_account_even_with_correct_password(container, registered, password):
    await container.users.set_active(registered.user.id, False)
    with pytest.raises(AccountDisabled):
        await container.auth.login("enfermeira@ubs.test", password)


async def test_login_success(container, registered, password):
    result = await container.auth.login("  ENFERMEIRA@ubs.test ", password)

    assert result.user.id == registered.user.id
    assert result.user.email == "enfermeira@ubs.test"
    assert "password" not in result.user.model_dump()

    claims = container.tokens.verify(result.token)
    assert claims.user_id == registered.user.id
    assert claims.role == "staff"
    assert claims.is_admin is False

    await container.auth.drain()
    user = await container.users.get(registered.user.id)
    assert user.last_login is not None


async def test_login_survives_last_login_failure(container, registered, password, monkeypatch):
    async def broken(user_id):
        raise RuntimeError("database went away")

    monkeypatch.setattr(container.users, "touch_last_login", broken)
    result = await container.auth.login("enfermeira@ubs.test", password)
    assert result.token
    await container.auth.drain()


async def test_login_does_not_wait_for_last_login(container, registered, password, monkeypatch):
    release = asyncio.Event()
    touched = []

    async def slow_touch(user_id):
        await release.wait()
        touched.append(user_id)

    monkeypatch.setattr(container.users, "touch_last_login", slow_touch)
    result = await container.auth.login("enfermeira@ubs.test", password)

    assert result.user.id == registered.user.id
    assert touched == []

    release.set()
    await container.auth.drain()
    assert touched == [registered.user.id]


async def test_register_requires_both_fields(container):
    with pytest.raises(ValidationError) as excinfo:
        await container.auth.register("", "")
    assert set(excinfo.value.details) == {"email", "password"}


async def test_register_stores_hash_not_plaintext(container, registered, password):
    user = await container.users.get(registered.user.id)
    assert user.password != password
    assert await container.hasher.verify(password, user.password)
    assert user.is_active is True
    assert container.tokens.verify(registered.token).email == "enfermeira@ubs.test"


async def test_register_duplicate_email_any_case(container, registered, count_rows):
    with pytest.raises(DuplicateEmail):
        await container.auth.register("Enfermeira@UBS.test", "other-password")
    assert await count_rows(User) == 1
