"""
Shield Policy Errors

Every failure the client core can report is a subclass of ShieldError, so
transaction-building code can catch the whole family or a single case.
None of these are retried or swallowed internally.

ProgramErrorCode mirrors the custom error codes returned by the deployed
program, so a `Custom(n)` transaction error can be turned into a message.
"""

from enum import IntEnum
from typing import Optional


class ShieldError(Exception):
    """Base class for all shield policy client errors."""


class InvalidIdentity(ShieldError, ValueError):
    """A value could not be interpreted as a 32-byte identity."""


class MaxSeedLengthExceeded(ShieldError):
    """Too many seeds, or a single seed longer than 32 bytes."""


class InvalidSeeds(ShieldError):
    """The seeds hash to a point on the Ed25519 curve."""


class BumpSeedExhausted(ShieldError):
    """No bump in [0, 255] produced an off-curve address."""


class LayoutMismatch(ShieldError):
    """Account bytes do not match the layout implied by their tag."""


class UnknownDiscriminator(ShieldError):
    """The leading tag matches no registered account kind."""

    def __init__(self, tag: int):
        super().__init__(f"Unknown account discriminator in tag 0x{tag:02x}")
        self.tag = tag


class CapacityExceeded(ShieldError):
    """The policy cannot hold another identity in any known layout."""


class IdentityNotFound(ShieldError):
    """The referenced identity slot does not exist."""


class InvalidInstructionData(ShieldError):
    """Instruction bytes do not decode to a known shield instruction."""


class PolicyNotFound(ShieldError):
    """A permission check named a policy address the snapshot does not hold."""


class ProgramErrorCode(IntEnum):
    """Custom error codes emitted by the on-chain shield program."""
    DESERIALIZATION_ERROR = 0
    SERIALIZATION_ERROR = 1
    INVALID_PROGRAM_OWNER = 2
    INVALID_PDA = 3
    EXPECTED_EMPTY_ACCOUNT = 4
    EXPECTED_NON_EMPTY_ACCOUNT = 5
    EXPECTED_SIGNER_ACCOUNT = 6
    EXPECTED_WRITABLE_ACCOUNT = 7
    ACCOUNT_MISMATCH = 8
    INVALID_ACCOUNT_KEY = 9
    NUMERICAL_OVERFLOW = 10
    EXPECTED_POSITIVE_AMOUNT = 11
    INCORRECT_TOKEN_OWNER = 12
    MISMATCH_MINT = 13
    IDENTITY_NOT_FOUND = 14
    INVALID_ASSOCIATED_TOKEN_ACCOUNT = 15
    MISSED_CONDITION = 16
    INVALID_ACCOUNT_DATA = 17
    INVALID_ARGUMENT = 18
    INVALID_INSTRUCTION_DATA = 19
    ACCOUNT_DATA_TOO_SMALL = 20
    INSUFFICIENT_FUNDS = 21
    INCORRECT_PROGRAM_ID = 22
    MISSING_REQUIRED_SIGNATURE = 23
    ACCOUNT_ALREADY_INITIALIZED = 24
    UNINITIALIZED_ACCOUNT = 25
    NOT_ENOUGH_ACCOUNT_KEYS = 26
    ACCOUNT_BORROW_FAILED = 27
    MAX_SEED_LENGTH_EXCEEDED = 28
    INVALID_SEEDS = 29
    BORSH_IO_ERROR = 30
    ACCOUNT_NOT_RENT_EXEMPT = 31
    UNSUPPORTED_SYSVAR = 32
    ILLEGAL_OWNER = 33
    MAX_ACCOUNTS_DATA_ALLOCATIONS_EXCEEDED = 34
    INVALID_REALLOC = 35
    MAX_INSTRUCTION_TRACE_LENGTH_EXCEEDED = 36
    BUILTIN_PROGRAMS_MUST_CONSUME_COMPUTE_UNITS = 37
    INVALID_ACCOUNT_OWNER = 38
    ARITHMETIC_OVERFLOW = 39
    IMMUTABLE = 40
    INCORRECT_AUTHORITY = 41
    GENERIC_ERROR = 42
    INVALID_STRATEGY = 43
    INVALID_POLICY_KIND = 44
    INVALID_INDEX_TO_REFERENCE_IDENTITY = 45

    @classmethod
    def describe(cls, code: int) -> str:
        """Human-readable message for a custom program error code."""
        member = cls.from_code(code)
        if member is None:
            return f"Unknown shield program error {code}"
        return _MESSAGES.get(member, member.name.replace("_", " ").capitalize())

    @classmethod
    def from_code(cls, code: int) -> Optional['ProgramErrorCode']:
        try:
            return cls(code)
        except ValueError:
            return None


# Messages that differ from the capitalized member name
_MESSAGES = {
    ProgramErrorCode.INVALID_PROGRAM_OWNER:
        "Invalid program owner. This likely means the provided account does not exist",
    ProgramErrorCode.INVALID_PDA: "Invalid PDA derivation",
    ProgramErrorCode.EXPECTED_POSITIVE_AMOUNT: "Expected positive amount",
    ProgramErrorCode.MISMATCH_MINT: "Mismatching mint",
    ProgramErrorCode.MISSED_CONDITION: "Condition not met",
    ProgramErrorCode.GENERIC_ERROR: "Generic program error",
    ProgramErrorCode.INVALID_INDEX_TO_REFERENCE_IDENTITY: "Invalid index to reference identity",
}
