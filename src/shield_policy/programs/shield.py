"""
Shield Program Instruction Builders

The shield program keeps one policy account per token mint. Every
instruction proves authority the same way: the owner signs, and names the
mint plus their associated token account for it. Builders here derive all of
those addresses, encode the instruction data, and report how much the policy
account will grow so the caller can fund rent.

Account order (fixed by the program):
    create / add / close:  mint, token_account, policy(w), payer(w,s), owner(w,s), system_program
    remove / replace:      mint, token_account, policy(w), owner(w,s)

These builders only construct instructions; sending them is the caller's job.
"""

import logging
from typing import List, Optional, Union

from ..config.settings import get_settings
from ..core.accounts import AccountMeta, PermissionStrategy, PolicyAccount
from ..core.identity import SYSTEM_PROGRAM_ID, Identity, IdentityLike, to_identity
from ..core.instructions import Instruction, ShieldInstructionData, ShieldInstructionKind, encode_instruction_data
from .byte_delta import add_identity_delta, close_policy_delta, create_policy_delta
from .pda import find_associated_token_address, find_policy_address

logger = logging.getLogger(__name__)


def _program(program_id: Optional[IdentityLike]) -> Identity:
    return to_identity(program_id) if program_id is not None else get_settings().program


def _policy_accounts(mint: Identity, owner: Identity, program_id: Identity,
                     payer: Optional[Identity] = None) -> List[AccountMeta]:
    """Account list shared by every policy instruction."""
    token_account = find_associated_token_address(owner, mint).address
    policy = find_policy_address(mint, program_id).address

    accounts = [
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(token_account, is_signer=False, is_writable=False),
        AccountMeta(policy, is_signer=False, is_writable=True),
    ]
    if payer is not None:
        accounts.append(AccountMeta(payer, is_signer=True, is_writable=True))
    accounts.append(AccountMeta(owner, is_signer=True, is_writable=True))
    if payer is not None:
        accounts.append(AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False))
    return accounts


def create_policy(mint: IdentityLike, owner: IdentityLike, payer: Optional[IdentityLike] = None,
                  strategy: PermissionStrategy = PermissionStrategy.DENY,
                  version: Optional[int] = None,
                  program_id: Optional[IdentityLike] = None) -> Instruction:
    """
    Create the policy account for `mint`.

    The payer funds storage and defaults to the owner. The derived policy
    address is `instruction.accounts[2].pubkey`.
    """
    mint, owner = to_identity(mint), to_identity(owner)
    payer = to_identity(payer) if payer is not None else owner
    version = version if version is not None else get_settings().policy_version
    program = _program(program_id)

    data = encode_instruction_data(ShieldInstructionData(
        kind=ShieldInstructionKind.CREATE_POLICY,
        strategy=PermissionStrategy(strategy),
    ))
    instruction = Instruction(
        program_id=program,
        accounts=_policy_accounts(mint, owner, program, payer),
        data=data,
        byte_delta=create_policy_delta(version),
    )
    logger.debug("Built create_policy for mint %s: %s", mint, instruction)
    return instruction


def add_identity(mint: IdentityLike, owner: IdentityLike, identity: IdentityLike,
                 account: PolicyAccount, payer: Optional[IdentityLike] = None,
                 program_id: Optional[IdentityLike] = None) -> Instruction:
    """
    Add `identity` to the policy of `mint`.

    `account` is the policy's current state; it decides whether the layout
    has to migrate and therefore how much rent the payer must add.
    """
    mint, owner = to_identity(mint), to_identity(owner)
    payer = to_identity(payer) if payer is not None else owner
    program = _program(program_id)

    data = encode_instruction_data(ShieldInstructionData(
        kind=ShieldInstructionKind.ADD_IDENTITY,
        identity=to_identity(identity),
    ))
    return Instruction(
        program_id=program,
        accounts=_policy_accounts(mint, owner, program, payer),
        data=data,
        byte_delta=add_identity_delta(account),
    )


def remove_identity(mint: IdentityLike, owner: IdentityLike, index: int,
                    program_id: Optional[IdentityLike] = None) -> Instruction:
    """Clear the identity at `index`; the account keeps its size."""
    mint, owner = to_identity(mint), to_identity(owner)
    program = _program(program_id)

    data = encode_instruction_data(ShieldInstructionData(
        kind=ShieldInstructionKind.REMOVE_IDENTITY,
        index=index,
    ))
    return Instruction(program_id=program, accounts=_policy_accounts(mint, owner, program), data=data)


def replace_identity(mint: IdentityLike, owner: IdentityLike, index: int, identity: IdentityLike,
                     program_id: Optional[IdentityLike] = None) -> Instruction:
    """Overwrite the identity at `index` in place."""
    mint, owner = to_identity(mint), to_identity(owner)
    program = _program(program_id)

    data = encode_instruction_data(ShieldInstructionData(
        kind=ShieldInstructionKind.REPLACE_IDENTITY,
        index=index,
        identity=to_identity(identity),
    ))
    return Instruction(program_id=program, accounts=_policy_accounts(mint, owner, program), data=data)


def close_policy(mint: IdentityLike, owner: IdentityLike, current: Union[PolicyAccount, int],
                 payer: Optional[IdentityLike] = None,
                 program_id: Optional[IdentityLike] = None) -> Instruction:
    """
    Close the policy of `mint`, returning its lamports to the payer.

    `current` is the policy account (or its size in bytes) before closing.
    """
    mint, owner = to_identity(mint), to_identity(owner)
    payer = to_identity(payer) if payer is not None else owner
    program = _program(program_id)

    data = encode_instruction_data(ShieldInstructionData(kind=ShieldInstructionKind.CLOSE_POLICY))
    return Instruction(
        program_id=program,
        accounts=_policy_accounts(mint, owner, program, payer),
        data=data,
        byte_delta=close_policy_delta(current),
    )
