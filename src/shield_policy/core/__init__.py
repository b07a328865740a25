"""
Shield Policy Core Components

The byte-level contract of the shield program: identities, seeds, the
discriminator scheme, versioned account layouts and instruction payloads.
"""

from .identity import (
    Identity,
    DEFAULT_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_2022_PROGRAM_ID,
    ASSOCIATED_TOKEN_PROGRAM_ID,
)
from .seeds import PolicySeeds, SeedSet, policy_seeds, SHIELD_NAMESPACE, POLICY_SEED
from .discriminator import AccountKind, discriminator_of, read_tag
from .accounts import (
    AccountMeta,
    PermissionStrategy,
    PolicyAccount,
    PolicySchema,
    POLICY_SCHEMAS,
    size_of,
    encode_policy,
    decode_policy,
    decode_account,
    migrate_policy,
    split_policy_data,
    decode_policy_identities,
)
from .instructions import (
    Instruction,
    ShieldInstructionData,
    ShieldInstructionKind,
    encode_instruction_data,
    decode_instruction_data,
)

__all__ = [
    'Identity', 'DEFAULT_PROGRAM_ID', 'SYSTEM_PROGRAM_ID',
    'TOKEN_2022_PROGRAM_ID', 'ASSOCIATED_TOKEN_PROGRAM_ID',
    'PolicySeeds', 'SeedSet', 'policy_seeds', 'SHIELD_NAMESPACE', 'POLICY_SEED',
    'AccountKind', 'discriminator_of', 'read_tag',
    'AccountMeta', 'PermissionStrategy', 'PolicyAccount', 'PolicySchema', 'POLICY_SCHEMAS',
    'size_of', 'encode_policy', 'decode_policy', 'decode_account', 'migrate_policy',
    'split_policy_data', 'decode_policy_identities',
    'Instruction', 'ShieldInstructionData', 'ShieldInstructionKind',
    'encode_instruction_data', 'decode_instruction_data',
]
