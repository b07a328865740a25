"""Tests for instruction byte-delta and rent accounting."""

from __future__ import annotations

import pytest

from shield_policy.core.accounts import PermissionStrategy, PolicyAccount, size_of
from shield_policy.core.discriminator import AccountKind
from shield_policy.errors import CapacityExceeded, IdentityNotFound, LayoutMismatch
from shield_policy.programs.byte_delta import (
    add_identity_delta,
    close_policy_delta,
    create_policy_delta,
    migration_delta,
    minimum_balance,
    remove_identity_delta,
    rent_delta,
    replace_identity_delta,
)


def _v1(identities: int = 0) -> PolicyAccount:
    return PolicyAccount(version=1, strategy=PermissionStrategy.DENY, bump=254, identities_len=identities)


def _v2(identities: int = 0) -> PolicyAccount:
    return PolicyAccount(version=2, strategy=PermissionStrategy.ALLOW, bump=254, identities_len=identities)


class TestCreate:
    def test_default_is_v1(self) -> None:
        assert create_policy_delta() == 7

    def test_v2(self) -> None:
        assert create_policy_delta(2) == 39

    def test_unknown_version(self) -> None:
        with pytest.raises(LayoutMismatch):
            create_policy_delta(7)


class TestAddIdentity:
    def test_v1_grows_by_migration(self) -> None:
        assert add_identity_delta(_v1()) == 32
        assert add_identity_delta(_v1()) == migration_delta(1, 2)

    def test_v2_with_room(self) -> None:
        assert add_identity_delta(_v2(10)) == 0

    def test_v2_full(self) -> None:
        with pytest.raises(CapacityExceeded):
            add_identity_delta(_v2(2**32 - 1))

    def test_create_then_add_equals_v2_size(self) -> None:
        assert create_policy_delta(1) + add_identity_delta(_v1()) == size_of(AccountKind.POLICY, 2)


class TestInPlaceEdits:
    def test_remove(self) -> None:
        assert remove_identity_delta(_v2(1)) == 0

    def test_remove_from_empty(self) -> None:
        with pytest.raises(IdentityNotFound):
            remove_identity_delta(_v2())

    def test_replace(self) -> None:
        assert replace_identity_delta(_v2(1)) == 0

    def test_replace_on_empty(self) -> None:
        with pytest.raises(IdentityNotFound):
            replace_identity_delta(_v2())


class TestClose:
    @pytest.mark.parametrize(("account", "expected"), [(_v1(), -7), (_v2(3), -39)])
    def test_account(self, account: PolicyAccount, expected: int) -> None:
        assert close_policy_delta(account) == expected

    def test_size(self) -> None:
        assert close_policy_delta(39) == -39

    def test_negative_size(self) -> None:
        with pytest.raises(ValueError):
            close_policy_delta(-1)

    def test_create_then_close_nets_zero(self) -> None:
        assert create_policy_delta(2) + close_policy_delta(_v2()) == 0


class TestMigration:
    def test_v1_to_latest(self) -> None:
        assert migration_delta() == 32

    def test_same_version(self) -> None:
        assert migration_delta(2, 2) == 0


class TestRent:
    def test_minimum_balance_empty(self) -> None:
        assert minimum_balance(0) == 890_880

    def test_minimum_balance_v1(self) -> None:
        assert minimum_balance(7) == 939_600

    def test_minimum_balance_negative(self) -> None:
        with pytest.raises(ValueError):
            minimum_balance(-1)

    def test_create_pays_full_balance(self) -> None:
        assert rent_delta(7) == minimum_balance(7)

    def test_growth_pays_difference(self) -> None:
        assert rent_delta(32, current_size=7) == 32 * 3480 * 2

    def test_close_refunds_everything(self) -> None:
        assert rent_delta(-39, current_size=39) == -minimum_balance(39)

    def test_no_change(self) -> None:
        assert rent_delta(0, current_size=39) == 0

    def test_shrinking_below_zero(self) -> None:
        with pytest.raises(ValueError):
            rent_delta(-40, current_size=39)
