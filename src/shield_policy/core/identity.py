"""
Identity (Public Key) Model

Every program, account and mint on the ledger is named by a 32-byte public
value. Clients pass these around as base58 text, but all hashing and layout
work happens on the raw bytes, so the bytes are the identity:
- Equality and hashing are byte-for-byte
- Instances are immutable once created
- Anything that is not exactly 32 bytes is rejected at construction

Based on: https://solana.com/docs/core/accounts#address
"""

from dataclasses import dataclass
from typing import Union

import base58

from ..errors import InvalidIdentity

IDENTITY_LENGTH = 32


@dataclass(frozen=True)
class Identity:
    """
    A 32-byte public identity of a program, account or mint.

    The text form is base58, matching what wallets and explorers show.
    """
    raw: bytes              # Exactly 32 bytes

    def __post_init__(self):
        """Validate identity invariants."""
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise InvalidIdentity(f"Identity must be bytes, got {type(self.raw).__name__}")
        raw = bytes(self.raw)
        if len(raw) != IDENTITY_LENGTH:
            raise InvalidIdentity(f"Identity must be {IDENTITY_LENGTH} bytes, got {len(raw)}")
        # Normalize bytearray/memoryview input so hashing and equality are stable
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_string(cls, value: str) -> 'Identity':
        """Parse a base58 identity such as 'So11111111111111111111111111111111111111112'."""
        try:
            raw = base58.b58decode(value)
        except ValueError as e:
            raise InvalidIdentity(f"Invalid base58 identity {value!r}: {e}") from e
        return cls(raw)

    @classmethod
    def from_hex(cls, value: str) -> 'Identity':
        try:
            raw = bytes.fromhex(value)
        except ValueError as e:
            raise InvalidIdentity(f"Invalid hex identity {value!r}: {e}") from e
        return cls(raw)

    @classmethod
    def default(cls) -> 'Identity':
        """The all-zero identity, used as the zero value of identity fields."""
        return cls(bytes(IDENTITY_LENGTH))

    def is_default(self) -> bool:
        return self.raw == bytes(IDENTITY_LENGTH)

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return base58.b58encode(self.raw).decode("ascii")

    def __repr__(self) -> str:
        return f"Identity({self})"


IdentityLike = Union[Identity, str, bytes]


def to_identity(value: IdentityLike) -> Identity:
    """Coerce base58 text or raw bytes into an Identity."""
    if isinstance(value, Identity):
        return value
    if isinstance(value, str):
        return Identity.from_string(value)
    return Identity(value)


# Well-known program identities
DEFAULT_PROGRAM_ID = Identity.from_string("b1ockYL7X6sGtJzueDbxRVBEEPN4YeqoLW276R3MX8W")
SYSTEM_PROGRAM_ID = Identity.from_string("11111111111111111111111111111111")
TOKEN_2022_PROGRAM_ID = Identity.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")
ASSOCIATED_TOKEN_PROGRAM_ID = Identity.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")
