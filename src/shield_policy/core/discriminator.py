"""
Account Discriminator Scheme

The first byte of every account the shield program owns says what it is:

    bit  7 6 5 4 | 3 2 1 0
         kind    | version - 1

The high nibble is the account-kind discriminator. It never changes between
schema revisions, so generic tooling can recognize "this is a policy account"
without knowing every layout. The low nibble carries the schema version.
Policy accounts therefore start with 0x00 (version 1) or 0x01 (version 2),
which are the bytes deployed accounts already hold.
"""

from enum import IntEnum
from typing import Dict, Tuple

from ..errors import LayoutMismatch, UnknownDiscriminator

TAG_OFFSET = 0
MAX_SCHEMA_VERSION = 16     # Four bits of version


class AccountKind(IntEnum):
    """Account kinds defined by the shield program."""
    POLICY = 0


# Closed mapping: discriminator value -> kind
_KINDS_BY_DISCRIMINATOR: Dict[int, AccountKind] = {kind.value: kind for kind in AccountKind}


def discriminator_of(kind: AccountKind) -> int:
    """The 4-bit discriminator identifying `kind`."""
    return AccountKind(kind).value


def make_tag(kind: AccountKind, version: int) -> int:
    """Build the leading tag byte for `kind` at schema `version`."""
    if not 1 <= version <= MAX_SCHEMA_VERSION:
        raise LayoutMismatch(f"Schema version {version} cannot be encoded in a tag")
    return (discriminator_of(kind) << 4) | (version - 1)


def split_tag(tag: int) -> Tuple[AccountKind, int]:
    """
    Split a tag byte into (kind, version).

    Raises:
        UnknownDiscriminator: the high nibble names no registered kind
    """
    kind = _KINDS_BY_DISCRIMINATOR.get(tag >> 4)
    if kind is None:
        raise UnknownDiscriminator(tag)
    return kind, (tag & 0x0F) + 1


def read_tag(data: bytes) -> Tuple[AccountKind, int]:
    """Read the kind and schema version from stored account bytes."""
    if len(data) <= TAG_OFFSET:
        raise LayoutMismatch("Account data is empty; no discriminator to read")
    return split_tag(data[TAG_OFFSET])
