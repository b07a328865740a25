"""Tests for the 32-byte Identity value."""

from __future__ import annotations

import pytest

from shield_policy.core.identity import (
    DEFAULT_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    Identity,
    to_identity,
)
from shield_policy.errors import InvalidIdentity, ShieldError


class TestIdentityConstruction:
    def test_from_bytes(self) -> None:
        identity = Identity(bytes(range(32)))
        assert bytes(identity) == bytes(range(32))

    def test_bytearray_is_normalized(self) -> None:
        identity = Identity(bytearray(32))
        assert type(identity.raw) is bytes
        assert identity == Identity.default()

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_wrong_length_rejected(self, length: int) -> None:
        with pytest.raises(InvalidIdentity):
            Identity(bytes(length))

    def test_non_bytes_rejected(self) -> None:
        with pytest.raises(InvalidIdentity):
            Identity("not bytes")  # type: ignore[arg-type]

    def test_invalid_identity_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Identity(b"short")
        assert issubclass(InvalidIdentity, ShieldError)


class TestIdentityText:
    def test_base58_round_trip(self) -> None:
        text = "b1ockYL7X6sGtJzueDbxRVBEEPN4YeqoLW276R3MX8W"
        assert str(Identity.from_string(text)) == text

    def test_default_program_bytes(self) -> None:
        assert bytes(DEFAULT_PROGRAM_ID).hex() == (
            "08b6a8029e657bfbcf4043088e1f88e4dbc816126dd82db16c4c829af4e2656b"
        )

    def test_system_program_is_zero(self) -> None:
        assert SYSTEM_PROGRAM_ID.is_default()
        assert str(Identity.default()) == "11111111111111111111111111111111"

    def test_invalid_base58_character(self) -> None:
        with pytest.raises(InvalidIdentity):
            Identity.from_string("0OIl" * 11)

    def test_base58_wrong_length(self) -> None:
        with pytest.raises(InvalidIdentity):
            Identity.from_string("abc")

    def test_from_hex(self) -> None:
        identity = Identity.from_hex("07" * 32)
        assert str(identity) == "US517G5965aydkZ46HS38QLi7UQiSojurfbQfKCELFx"

    def test_from_bad_hex(self) -> None:
        with pytest.raises(InvalidIdentity):
            Identity.from_hex("zz" * 32)

    def test_repr(self) -> None:
        assert repr(Identity.default()) == "Identity(11111111111111111111111111111111)"


class TestIdentityEquality:
    def test_equal_bytes_equal_identities(self) -> None:
        assert Identity(bytes([5]) * 32) == Identity(bytes([5]) * 32)
        assert hash(Identity(bytes([5]) * 32)) == hash(Identity(bytes([5]) * 32))

    def test_different_bytes(self) -> None:
        assert Identity(bytes([5]) * 32) != Identity(bytes([6]) * 32)

    def test_immutable(self) -> None:
        identity = Identity.default()
        with pytest.raises(AttributeError):
            identity.raw = bytes([1]) * 32  # type: ignore[misc]


class TestToIdentity:
    def test_passthrough(self, mint: Identity) -> None:
        assert to_identity(mint) is mint

    def test_from_text(self, owner: Identity) -> None:
        assert to_identity(str(owner)) == owner

    def test_from_bytes(self, owner: Identity) -> None:
        assert to_identity(bytes(owner)) == owner
