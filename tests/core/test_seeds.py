"""Tests for the policy seed schema."""

from __future__ import annotations

import pytest

from shield_policy.core.identity import Identity
from shield_policy.core.seeds import (
    MAX_SEED_LEN,
    POLICY_SEED,
    SHIELD_NAMESPACE,
    PolicySeeds,
    policy_seeds,
    validate_seeds,
)
from shield_policy.errors import MaxSeedLengthExceeded


class TestPolicySeeds:
    def test_wire_layout(self, mint: Identity) -> None:
        assert policy_seeds(mint) == (b"shield", b"policy", bytes(mint))

    def test_constants_are_utf8(self) -> None:
        assert SHIELD_NAMESPACE == "shield".encode("utf-8")
        assert POLICY_SEED == "policy".encode("utf-8")

    def test_mint_bytes_verbatim(self) -> None:
        mint = Identity(bytes(range(32)))
        assert policy_seeds(mint)[2] == bytes(range(32))
        assert len(policy_seeds(mint)[2]) == 32

    def test_typed_record(self, mint: Identity) -> None:
        assert PolicySeeds(mint=mint).to_seed_set() == policy_seeds(mint)

    def test_distinct_mints_distinct_seeds(self) -> None:
        a = Identity(bytes([1]) * 32)
        b = Identity(bytes([1]) * 31 + bytes([2]))
        assert policy_seeds(a) != policy_seeds(b)

    def test_seed_set_is_immutable(self, mint: Identity) -> None:
        assert isinstance(policy_seeds(mint), tuple)


class TestValidateSeeds:
    def test_accepts_limit(self) -> None:
        seeds = [bytes(MAX_SEED_LEN)] * 16
        assert validate_seeds(seeds) == tuple(seeds)

    def test_rejects_long_seed(self) -> None:
        with pytest.raises(MaxSeedLengthExceeded):
            validate_seeds([bytes(MAX_SEED_LEN + 1)])

    def test_rejects_too_many(self) -> None:
        with pytest.raises(MaxSeedLengthExceeded):
            validate_seeds([b"a"] * 17)
