"""
Instruction Byte-Delta Accounting

Every mutating shield instruction changes the size of the policy account by a
known amount. Transaction builders use these numbers to pre-fund rent before
sending, so the arithmetic here must agree exactly with the layout registry.

- create:  +size of the new layout
- add:     0 when the layout has room, otherwise the growth of migrating
- remove / replace: 0, edits happen in place
- close:   -current size, storage is reclaimed

Nothing here touches storage; it is arithmetic over known sizes.

Based on: https://solana.com/docs/core/fees#rent
"""

from typing import Union

from ..core.accounts import LATEST_POLICY_VERSION, PolicyAccount, size_of
from ..core.discriminator import AccountKind
from ..errors import IdentityNotFound

# Default ledger rent parameters
ACCOUNT_STORAGE_OVERHEAD = 128          # Bytes charged on top of account data
LAMPORTS_PER_BYTE_YEAR = 3480
EXEMPTION_THRESHOLD_YEARS = 2


def create_policy_delta(version: int = 1) -> int:
    """Bytes allocated by creating a policy at schema `version`."""
    return size_of(AccountKind.POLICY, version)


def add_identity_delta(account: PolicyAccount) -> int:
    """Bytes added to `account` by adding one identity."""
    return account.with_identity_added().size - account.size


def remove_identity_delta(account: PolicyAccount) -> int:
    """Always 0; raises IdentityNotFound when there is nothing to remove."""
    account.with_identity_removed()
    return 0


def replace_identity_delta(account: PolicyAccount) -> int:
    """Always 0; raises IdentityNotFound when there is no slot to overwrite."""
    if account.identities_len == 0:
        raise IdentityNotFound("Policy has no identities to replace")
    return 0


def close_policy_delta(current: Union[PolicyAccount, int]) -> int:
    """Bytes reclaimed by closing an account of the given size (negative)."""
    current_size = current.size if isinstance(current, PolicyAccount) else int(current)
    if current_size < 0:
        raise ValueError(f"Account size cannot be negative: {current_size}")
    return -current_size


def migration_delta(from_version: int = 1, to_version: int = LATEST_POLICY_VERSION) -> int:
    """Growth of upgrading a policy between two schema versions."""
    return size_of(AccountKind.POLICY, to_version) - size_of(AccountKind.POLICY, from_version)


def minimum_balance(data_len: int) -> int:
    """Lamports an account of `data_len` bytes needs to be rent-exempt."""
    if data_len < 0:
        raise ValueError(f"Account size cannot be negative: {data_len}")
    return (ACCOUNT_STORAGE_OVERHEAD + data_len) * LAMPORTS_PER_BYTE_YEAR * EXEMPTION_THRESHOLD_YEARS


def rent_delta(byte_delta: int, current_size: int = 0) -> int:
    """
    Lamports the funding account pays (positive) or receives (negative)
    when an account of `current_size` bytes changes by `byte_delta`.

    A `current_size` of 0 means the account does not exist yet. Closing
    (`byte_delta == -current_size`) refunds the whole balance, including
    the storage overhead.
    """
    new_size = current_size + byte_delta
    if new_size < 0:
        raise ValueError(f"Delta {byte_delta} shrinks a {current_size} byte account below zero")

    before = minimum_balance(current_size) if current_size > 0 else 0
    after = minimum_balance(new_size) if new_size > 0 else 0
    return after - before
