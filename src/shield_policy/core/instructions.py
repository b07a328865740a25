"""
Shield Instruction Model

Instructions name a program, the accounts it touches (with signer/writable
flags declared upfront), and opaque data bytes. For the shield program the
data is a borsh-encoded enum: one variant byte followed by the variant's
fields in little-endian order.

    0 CreatePolicy     strategy: u8
    1 AddIdentity      identity: [u8; 32]
    2 RemoveIdentity   index: u64
    3 ReplaceIdentity  index: u64, identity: [u8; 32]
    4 ClosePolicy      -

Based on: https://solana.com/docs/core/transactions
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional

from construct import Bytes, ConstructError, Int8ul, Int64ul, Struct

from ..errors import InvalidInstructionData
from .accounts import AccountMeta, PermissionStrategy
from .identity import IDENTITY_LENGTH, Identity


class ShieldInstructionKind(IntEnum):
    """Variant index of each shield instruction."""
    CREATE_POLICY = 0
    ADD_IDENTITY = 1
    REMOVE_IDENTITY = 2
    REPLACE_IDENTITY = 3
    CLOSE_POLICY = 4


_PAYLOADS: Dict[ShieldInstructionKind, Struct] = {
    ShieldInstructionKind.CREATE_POLICY: Struct("strategy" / Int8ul),
    ShieldInstructionKind.ADD_IDENTITY: Struct("identity" / Bytes(IDENTITY_LENGTH)),
    ShieldInstructionKind.REMOVE_IDENTITY: Struct("index" / Int64ul),
    ShieldInstructionKind.REPLACE_IDENTITY: Struct(
        "index" / Int64ul,
        "identity" / Bytes(IDENTITY_LENGTH),
    ),
    ShieldInstructionKind.CLOSE_POLICY: Struct(),
}


@dataclass(frozen=True)
class ShieldInstructionData:
    """Decoded shield instruction data; unused fields stay None."""
    kind: ShieldInstructionKind
    strategy: Optional[PermissionStrategy] = None
    identity: Optional[Identity] = None
    index: Optional[int] = None

    def field_names(self) -> List[str]:
        return [sub.name for sub in _PAYLOADS[self.kind].subcons]


def encode_instruction_data(instruction: ShieldInstructionData) -> bytes:
    """Serialize instruction data into the program's borsh layout."""
    payload = _PAYLOADS[instruction.kind]
    fields = {}
    for name in instruction.field_names():
        value = getattr(instruction, name)
        if value is None:
            raise ValueError(f"{instruction.kind.name} requires '{name}'")
        fields[name] = bytes(value) if isinstance(value, Identity) else int(value)

    try:
        body = payload.build(fields)
    except ConstructError as e:
        raise ValueError(f"Cannot encode {instruction.kind.name}: {e}") from e
    return bytes([instruction.kind]) + body


def decode_instruction_data(data: bytes) -> ShieldInstructionData:
    """
    Parse shield instruction data.

    Raises:
        InvalidInstructionData: empty input, unknown variant, wrong length,
            or an invalid strategy value
    """
    data = bytes(data)
    if not data:
        raise InvalidInstructionData("Instruction data is empty")
    try:
        kind = ShieldInstructionKind(data[0])
    except ValueError:
        raise InvalidInstructionData(f"Unknown instruction variant {data[0]}") from None

    payload = _PAYLOADS[kind]
    body = data[1:]
    if len(body) != payload.sizeof():
        raise InvalidInstructionData(
            f"{kind.name} expects {payload.sizeof()} data bytes, got {len(body)}"
        )

    parsed = payload.parse(body)
    fields = {}
    if "strategy" in parsed:
        try:
            fields["strategy"] = PermissionStrategy(parsed.strategy)
        except ValueError:
            raise InvalidInstructionData(f"Invalid permission strategy {parsed.strategy}") from None
    if "identity" in parsed:
        fields["identity"] = Identity(parsed.identity)
    if "index" in parsed:
        fields["index"] = parsed.index
    return ShieldInstructionData(kind=kind, **fields)


@dataclass
class Instruction:
    """
    A ready-to-send instruction for an external transaction builder.

    `byte_delta` is how much the policy account grows (or shrinks) when the
    instruction executes, so the sender can fund rent before submitting.
    """
    program_id: Identity                # Program to invoke
    accounts: List[AccountMeta]         # Accounts with access metadata
    data: bytes                         # Instruction data
    byte_delta: int = 0                 # Policy account size change

    def __str__(self) -> str:
        return (f"Instruction({str(self.program_id)[:8]}..., {len(self.accounts)} accounts, "
                f"{len(self.data)} bytes, delta={self.byte_delta:+d})")
