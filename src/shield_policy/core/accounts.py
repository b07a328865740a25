"""
Shield Policy Account Model

The policy account is the on-chain record that decides which identities may
interact with a token mint. Its bytes are a fixed, versioned layout:

    version 1 (7 bytes)            version 2 (39 bytes)
    0   tag            u8          0   tag            u8
    1   strategy       u8          1   strategy       u8
    2   bump           u8          2   bump           u8
    3   identities_len u32 LE      3   owner          [u8; 32]
                                   35  identities_len u32 LE

Version 2 keeps every version 1 field and adds the owner identity and a
larger identity capacity. Each revision is one row in POLICY_SCHEMAS; adding
a revision means adding a row, not a new code path.

Based on: https://solana.com/docs/core/accounts
"""

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple, Union

from construct import Bytes, Int8ul, Int32ul, Struct

from ..errors import CapacityExceeded, IdentityNotFound, LayoutMismatch
from .discriminator import AccountKind, make_tag, read_tag
from .identity import IDENTITY_LENGTH, Identity

logger = logging.getLogger(__name__)

U32_MAX = 2**32 - 1


class PermissionStrategy(IntEnum):
    """How the identity list is interpreted."""
    DENY = 0                # Listed identities are blocked
    ALLOW = 1               # Only listed identities are permitted


POLICY_V1_LAYOUT = Struct(
    "tag" / Int8ul,
    "strategy" / Int8ul,
    "bump" / Int8ul,
    "identities_len" / Int32ul,
)

POLICY_V2_LAYOUT = Struct(
    "tag" / Int8ul,
    "strategy" / Int8ul,
    "bump" / Int8ul,
    "owner" / Bytes(IDENTITY_LENGTH),
    "identities_len" / Int32ul,
)


@dataclass(frozen=True)
class PolicySchema:
    """One revision of the policy account layout."""
    version: int
    layout: Struct
    identity_capacity: int      # Identities this revision accepts before migrating

    @property
    def size(self) -> int:
        return self.layout.sizeof()

    @property
    def has_owner(self) -> bool:
        return "owner" in {sub.name for sub in self.layout.subcons}


POLICY_SCHEMAS: Dict[int, PolicySchema] = {
    1: PolicySchema(version=1, layout=POLICY_V1_LAYOUT, identity_capacity=0),
    2: PolicySchema(version=2, layout=POLICY_V2_LAYOUT, identity_capacity=U32_MAX),
}

LATEST_POLICY_VERSION = max(POLICY_SCHEMAS)

ACCOUNT_SCHEMAS: Dict[Tuple[AccountKind, int], PolicySchema] = {
    (AccountKind.POLICY, version): schema for version, schema in POLICY_SCHEMAS.items()
}


def schema_for(kind: AccountKind, version: int) -> PolicySchema:
    schema = ACCOUNT_SCHEMAS.get((kind, version))
    if schema is None:
        raise LayoutMismatch(f"No layout registered for {AccountKind(kind).name} version {version}")
    return schema


def size_of(kind: AccountKind, version: int) -> int:
    """Exact byte size of `kind` at schema `version`."""
    return schema_for(kind, version).size


@dataclass(frozen=True)
class PolicyAccount:
    """
    Decoded shield policy account.

    Instances are immutable copies of what is stored on-chain; operations
    return a new account describing the post-state.
    """
    version: int                            # Schema revision (1 or 2)
    strategy: PermissionStrategy            # Allow-list or deny-list
    bump: int                               # Canonical bump of the policy PDA
    identities_len: int = 0                 # Number of listed identities
    owner: Optional[Identity] = None        # Version 2 only

    def __post_init__(self):
        """Validate account invariants."""
        schema = schema_for(AccountKind.POLICY, self.version)
        try:
            object.__setattr__(self, "strategy", PermissionStrategy(self.strategy))
        except ValueError:
            raise ValueError(f"Invalid permission strategy {self.strategy!r}") from None
        if not 0 <= self.bump <= 255:
            raise ValueError(f"Bump must fit in one byte, got {self.bump}")
        # The count is bounded by the u32 field, not by identity_capacity:
        # version 1 accounts written before version 2 existed still carry
        # identities, they just cannot take new ones without migrating.
        if not 0 <= self.identities_len <= U32_MAX:
            raise ValueError(f"Identity count out of range: {self.identities_len}")

        if schema.has_owner:
            if self.owner is None:
                object.__setattr__(self, "owner", Identity.default())
        elif self.owner is not None:
            raise ValueError(f"Policy version {self.version} has no owner field")

    @property
    def kind(self) -> AccountKind:
        return AccountKind.POLICY

    @property
    def schema(self) -> PolicySchema:
        return schema_for(AccountKind.POLICY, self.version)

    @property
    def size(self) -> int:
        return self.schema.size

    def has_capacity(self) -> bool:
        """Whether another identity fits without changing layout."""
        return self.identities_len < self.schema.identity_capacity

    def with_identity_added(self) -> 'PolicyAccount':
        """
        Post-state of adding one identity.

        Migrates to the next layout revision when this one is full.
        """
        account = self
        while not account.has_capacity():
            next_version = account.version + 1
            if next_version not in POLICY_SCHEMAS:
                raise CapacityExceeded(
                    f"Policy version {account.version} is full at {account.identities_len} identities"
                )
            account = migrate_policy(account)
        return replace(account, identities_len=account.identities_len + 1)

    def with_identity_removed(self) -> 'PolicyAccount':
        """Post-state of removing one identity (layout never shrinks)."""
        if self.identities_len == 0:
            raise IdentityNotFound("Policy has no identities to remove")
        return replace(self, identities_len=self.identities_len - 1)

    def __str__(self) -> str:
        owner = f", owner={self.owner}" if self.owner is not None else ""
        return (f"PolicyAccount(v{self.version}, {self.strategy.name.lower()}, "
                f"bump={self.bump}, identities={self.identities_len}{owner})")


def encode_policy(account: PolicyAccount) -> bytes:
    """Serialize `account` into exactly `size_of(POLICY, account.version)` bytes."""
    schema = account.schema
    fields = {
        "tag": make_tag(AccountKind.POLICY, account.version),
        "strategy": int(account.strategy),
        "bump": account.bump,
        "identities_len": account.identities_len,
    }
    if schema.has_owner:
        fields["owner"] = bytes(account.owner)

    return schema.layout.build(fields)


def decode_policy(data: bytes) -> PolicyAccount:
    """
    Parse stored policy bytes.

    Raises:
        UnknownDiscriminator: leading tag names no account kind
        LayoutMismatch: not a policy account, unknown version, wrong length
            for the version, or an invalid strategy byte
    """
    data = bytes(data)
    kind, version = read_tag(data)
    if kind is not AccountKind.POLICY:
        raise LayoutMismatch(f"Expected a policy account, found {kind.name}")

    schema = schema_for(kind, version)
    if len(data) != schema.size:
        raise LayoutMismatch(
            f"Policy version {version} is {schema.size} bytes, got {len(data)}"
        )

    parsed = schema.layout.parse(data)
    try:
        strategy = PermissionStrategy(parsed.strategy)
    except ValueError:
        raise LayoutMismatch(f"Invalid permission strategy byte {parsed.strategy}") from None

    return PolicyAccount(
        version=version,
        strategy=strategy,
        bump=parsed.bump,
        identities_len=parsed.identities_len,
        owner=Identity(parsed.owner) if schema.has_owner else None,
    )


def migrate_policy(source: Union[bytes, PolicyAccount],
                   owner: Optional[Identity] = None) -> PolicyAccount:
    """
    Upgrade a version 1 policy to version 2.

    Every version 1 field is carried over; the owner is set to `owner` or the
    zero identity. The version 1 buffer is never read past its 7 bytes.
    Version 2 input is returned unchanged.
    """
    account = source if isinstance(source, PolicyAccount) else decode_policy(source)
    if account.version == 2:
        return account
    if account.version != 1:
        raise LayoutMismatch(f"No migration path from policy version {account.version}")

    migrated = PolicyAccount(
        version=2,
        strategy=account.strategy,
        bump=account.bump,
        identities_len=account.identities_len,
        owner=owner if owner is not None else Identity.default(),
    )
    logger.debug("Migrated policy v1 -> v2 (%d identities)", account.identities_len)
    return migrated


def split_policy_data(data: bytes) -> Tuple[bytes, bytes]:
    """
    Split a stored policy into its fixed header and the identity slots after it.

    The program appends one 32-byte slot per added identity behind the
    header, so a live account is `size_of(POLICY, version) + 32 * n` bytes.

    Raises:
        LayoutMismatch: shorter than the header, or the tail is not whole slots
    """
    data = bytes(data)
    kind, version = read_tag(data)
    if kind is not AccountKind.POLICY:
        raise LayoutMismatch(f"Expected a policy account, found {kind.name}")

    header_size = size_of(kind, version)
    if len(data) < header_size:
        raise LayoutMismatch(
            f"Policy version {version} needs at least {header_size} bytes, got {len(data)}"
        )
    slots = data[header_size:]
    if len(slots) % IDENTITY_LENGTH:
        raise LayoutMismatch(f"{len(slots)} trailing bytes are not whole identity slots")
    return data[:header_size], slots


def decode_policy_identities(data: bytes) -> List[Identity]:
    """
    Read the identities listed in a stored policy, in slot order.

    Removing an identity zeroes its slot instead of shrinking the account;
    those cleared slots are skipped.
    """
    _, slots = split_policy_data(data)
    identities = (
        Identity(slots[offset:offset + IDENTITY_LENGTH])
        for offset in range(0, len(slots), IDENTITY_LENGTH)
    )
    return [identity for identity in identities if not identity.is_default()]


# Closed dispatch: account kind -> decoder
ACCOUNT_DECODERS: Dict[AccountKind, Callable[[bytes], PolicyAccount]] = {
    AccountKind.POLICY: decode_policy,
}


def decode_account(data: bytes) -> PolicyAccount:
    """Decode any shield account by its leading tag."""
    kind, _ = read_tag(bytes(data))
    return ACCOUNT_DECODERS[kind](data)


@dataclass
class AccountMeta:
    """
    Account metadata for instruction building.

    This tells the runtime how an instruction wants to access each account.
    Declaring access patterns upfront is what enables parallel execution.
    """
    pubkey: Identity     # Account public key
    is_signer: bool      # Must sign transaction
    is_writable: bool    # Can be modified

    def __str__(self) -> str:
        """Human-readable representation."""
        flags = []
        if self.is_signer:
            flags.append("signer")
        if self.is_writable:
            flags.append("writable")
        flag_str = f"({', '.join(flags)})" if flags else "(readonly)"
        return f"{str(self.pubkey)[:8]}...{flag_str}"
