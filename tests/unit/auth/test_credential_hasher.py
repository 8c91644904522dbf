import secrets
from dataclasses import replace

import pytest

from inkpress.core.errors import ConfigurationError
from inkpress.infrastructure.auth import CredentialHasher


def test_hash_is_salted(hasher):
    first = hasher.hash("Passw0rd!")
    second = hasher.hash("Passw0rd!")

    assert first != second
    assert first.startswith("$argon2id$")
    assert hasher.verify("Passw0rd!", first)
    assert hasher.verify("Passw0rd!", second)


def test_verify_random_plaintexts(hasher):
    """Correct plaintext verifies and a different one does not, for 100 samples."""
    for _ in range(100):
        plaintext = secrets.token_urlsafe(12)
        hashed = hasher.hash(plaintext)
        assert hasher.verify(plaintext, hashed)
        assert not hasher.verify(plaintext + "x", hashed)


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$12$abcdefghijklmnopqrstuv", "$argon2id$v=19$broken"])
def test_verify_malformed_hash_returns_false(hasher, bad_hash):
    assert hasher.verify("Passw0rd!", bad_hash) is False


def test_dummy_hash_matches_nothing_real(hasher):
    assert hasher.dummy_hash.startswith("$argon2id$")
    assert not hasher.verify("Passw0rd!", hasher.dummy_hash)


def test_needs_rehash_after_cost_change(auth_config, hasher):
    hashed = hasher.hash("Passw0rd!")
    assert hasher.needs_rehash(hashed) is False

    stronger = CredentialHasher(replace(auth_config, hash_time_cost=2))
    assert stronger.needs_rehash(hashed) is True
    assert stronger.needs_rehash("garbage") is True


def test_invalid_parameters_are_a_configuration_error(auth_config):
    with pytest.raises(ConfigurationError):
        CredentialHasher(replace(auth_config, hash_time_cost=0))
