"""
Shield Policy Client Core

The versioned on-chain contract of the shield access-control program,
reproduced byte-for-byte in Python:
- Deterministic policy address derivation from a token mint
- Versioned policy account layouts with explicit migration
- Discriminator-based account recognition
- Storage byte-delta and rent accounting for each instruction
- Allow/deny checks of an identity against a set of policies

Typical use:

    from shield_policy import Identity, find_policy_address
    address, bump = find_policy_address(Identity.from_string(mint))
"""

__version__ = "1.0.0"

from .errors import (
    ShieldError,
    BumpSeedExhausted,
    LayoutMismatch,
    UnknownDiscriminator,
    InvalidIdentity,
    PolicyNotFound,
    ProgramErrorCode,
)
from .core import *
from .programs import (
    DerivedAddress,
    find_program_address,
    find_policy_address,
    find_associated_token_address,
    create_policy_delta,
    add_identity_delta,
    close_policy_delta,
    Policy,
    PolicySnapshot,
    is_allowed,
)

__all__ = [
    # Errors
    'ShieldError',
    'BumpSeedExhausted',
    'LayoutMismatch',
    'UnknownDiscriminator',
    'InvalidIdentity',
    'PolicyNotFound',
    'ProgramErrorCode',

    # Core contract
    'Identity',
    'DEFAULT_PROGRAM_ID',
    'PolicySeeds',
    'policy_seeds',
    'AccountKind',
    'PermissionStrategy',
    'PolicyAccount',
    'size_of',
    'encode_policy',
    'decode_policy',
    'decode_account',
    'migrate_policy',

    # Derivation and accounting
    'DerivedAddress',
    'find_program_address',
    'find_policy_address',
    'find_associated_token_address',
    'create_policy_delta',
    'add_identity_delta',
    'close_policy_delta',

    # Permission checks
    'Policy',
    'PolicySnapshot',
    'is_allowed',
]
