import pytest

from care_api.security.passwords import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


async def test_hash_then_verify(hasher):
    stored = await hasher.hash("correct horse")
    assert stored != "correct horse"
    assert await hasher.verify("correct horse", stored)


async def test_wrong_password_does_not_verify(hasher):
    stored = await hasher.hash("correct horse")
    assert not await hasher.verify("correct horsf", stored)
    assert not await hasher.verify("", stored)


async def test_each_hash_uses_a_fresh_salt(hasher):
    first = await hasher.hash("same password")
    second = await hasher.hash("same password")
    assert first != second
    assert await hasher.verify("same password", first)
    assert await hasher.verify("same password", second)


async def test_stored_hash_embeds_cost(hasher):
    stored = await hasher.hash("abc")
    assert stored.startswith("$2b$04$")


@pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash", "$2b$04$tooshort"])
async def test_malformed_stored_hash_fails_closed(hasher, stored):
    assert await hasher.verify("anything", stored) is False


async def test_long_passwords_are_handled(hasher):
    long_password = "x" * 100
    stored = await hasher.hash(long_password)
    assert await hasher.verify(long_password, stored)
