"""
Shield Program Client Logic

- Program Derived Address (PDA) derivation for policy and token accounts
- Byte-delta and rent accounting for each mutating instruction
- Instruction builders for the shield program
- Allow/deny decisions across policies

Programs are stateless and operate on accounts they own; everything here is
a pure function of its inputs.
"""

from .pda import (
    DerivedAddress,
    create_program_address,
    find_program_address,
    find_policy_address,
    find_associated_token_address,
    is_on_curve,
)
from .byte_delta import (
    create_policy_delta,
    add_identity_delta,
    close_policy_delta,
    minimum_balance,
    rent_delta,
)
from .permissions import Policy, PolicySnapshot, is_allowed
from . import shield

__all__ = [
    'DerivedAddress',
    'create_program_address',
    'find_program_address',
    'find_policy_address',
    'find_associated_token_address',
    'is_on_curve',
    'create_policy_delta',
    'add_identity_delta',
    'close_policy_delta',
    'minimum_balance',
    'rent_delta',
    'Policy',
    'PolicySnapshot',
    'is_allowed',
    'shield',
]
