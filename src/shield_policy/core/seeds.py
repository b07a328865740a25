"""
Seed Schema

A program derived address is named by an ordered list of byte strings. The
order and encoding are part of the wire contract: changing either moves every
derived address. For a policy account the seeds are

    [utf8("shield"), utf8("policy"), bytes(mint)]

with the full 32 mint bytes used verbatim.

Based on: https://solana.com/docs/core/pda
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..errors import MaxSeedLengthExceeded
from .identity import Identity

SHIELD_NAMESPACE = b"shield"
POLICY_SEED = b"policy"

MAX_SEEDS = 16          # Including the bump seed
MAX_SEED_LEN = 32       # Bytes per seed

SeedSet = Tuple[bytes, ...]


@dataclass(frozen=True)
class PolicySeeds:
    """Variable inputs of the policy address."""
    mint: Identity          # The token mint the policy guards

    def to_seed_set(self) -> SeedSet:
        return policy_seeds(self.mint)


def policy_seeds(mint: Identity) -> SeedSet:
    """Ordered seeds for the policy account of `mint`."""
    return (SHIELD_NAMESPACE, POLICY_SEED, bytes(mint))


def validate_seeds(seeds: Sequence[bytes]) -> SeedSet:
    """
    Reject seed lists the ledger would refuse before hashing.

    `seeds` must already include the bump when one is used.
    """
    if len(seeds) > MAX_SEEDS:
        raise MaxSeedLengthExceeded(f"At most {MAX_SEEDS} seeds allowed, got {len(seeds)}")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise MaxSeedLengthExceeded(
                f"Seed of {len(seed)} bytes exceeds the {MAX_SEED_LEN} byte limit"
            )
    return tuple(bytes(seed) for seed in seeds)
