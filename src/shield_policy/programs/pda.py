"""
Program Derived Addresses (PDA)

A PDA is an address that no private key can sign for: it is a SHA-256 hash
of seeds and the owning program id that falls *off* the Ed25519 curve. Only
the owning program can sign for it, which is what lets a program own state
like the shield policy account.

Derivation:
- Append a one-byte bump to the seeds, trying 255 first and counting down
- hash(seeds || bump || program_id || "ProgramDerivedAddress")
- The first candidate that is not a valid curve point is the address

The scan order is part of the contract: the canonical bump is the highest
one that works, and every client must agree on it.

Based on: https://solana.com/docs/core/pda
"""

import hashlib
import logging
from functools import lru_cache
from typing import NamedTuple, Sequence

from ecdsa.curves import Ed25519
from ecdsa.ellipticcurve import PointEdwards
from ecdsa.errors import MalformedPointError

from ..core.identity import ASSOCIATED_TOKEN_PROGRAM_ID, DEFAULT_PROGRAM_ID, TOKEN_2022_PROGRAM_ID, Identity
from ..core.seeds import SeedSet, policy_seeds, validate_seeds
from ..errors import BumpSeedExhausted, InvalidSeeds

logger = logging.getLogger(__name__)

PDA_MARKER = b"ProgramDerivedAddress"
MAX_BUMP = 255

# Bounded so long-running clients deriving many mints don't grow without limit
DERIVATION_CACHE_SIZE = 4096


class DerivedAddress(NamedTuple):
    """An off-curve address together with the bump that produced it."""
    address: Identity
    bump: int


def is_on_curve(candidate: bytes) -> bool:
    """
    Check whether 32 bytes decode to a point on the Ed25519 curve.

    This is the same test the ledger runs when decompressing a public key:
    recover x from y and see whether the square root exists.
    """
    try:
        PointEdwards.from_bytes(Ed25519.curve, bytes(candidate))
    except MalformedPointError:
        return False
    return True


def create_program_address(seeds: Sequence[bytes], program_id: Identity) -> Identity:
    """
    Hash seeds (bump included) into an address owned by `program_id`.

    Raises:
        MaxSeedLengthExceeded: too many seeds or a seed over 32 bytes
        InvalidSeeds: the hash lands on the curve and could have a private key
    """
    hasher = hashlib.sha256()
    for seed in validate_seeds(seeds):
        hasher.update(seed)
    hasher.update(bytes(program_id))
    hasher.update(PDA_MARKER)
    candidate = hasher.digest()

    if is_on_curve(candidate):
        raise InvalidSeeds("Derived address lies on the Ed25519 curve")
    return Identity(candidate)


def find_program_address(seeds: Sequence[bytes], program_id: Identity) -> DerivedAddress:
    """
    Find the canonical (highest-bump) program address for `seeds`.

    Results are memoized per (seeds, program_id); identical inputs always
    give identical outputs, so the cache can never go stale.
    """
    return _find_program_address(tuple(bytes(seed) for seed in seeds), program_id)


@lru_cache(maxsize=DERIVATION_CACHE_SIZE)
def _find_program_address(seeds: SeedSet, program_id: Identity) -> DerivedAddress:
    # Reject oversized seeds once, before sweeping the bump
    validate_seeds(seeds + (b"\x00",))

    for bump in range(MAX_BUMP, -1, -1):
        try:
            address = create_program_address(seeds + (bytes([bump]),), program_id)
        except InvalidSeeds:
            continue
        logger.debug("Derived program address %s (bump %d) for program %s", address, bump, program_id)
        return DerivedAddress(address, bump)

    raise BumpSeedExhausted(f"No off-curve address for seeds under program {program_id}")


def clear_derivation_cache() -> None:
    """Drop memoized derivations (useful in tests that patch the curve check)."""
    _find_program_address.cache_clear()


def find_policy_address(mint: Identity, program_id: Identity = DEFAULT_PROGRAM_ID) -> DerivedAddress:
    """Address and bump of the shield policy account guarding `mint`."""
    return find_program_address(policy_seeds(mint), program_id)


def find_associated_token_address(owner: Identity, mint: Identity,
                                  token_program: Identity = TOKEN_2022_PROGRAM_ID) -> DerivedAddress:
    """
    Address of `owner`'s associated token account for `mint`.

    Every policy instruction names this account to prove the signer holds
    the token.
    """
    seeds = (bytes(owner), bytes(token_program), bytes(mint))
    return find_program_address(seeds, ASSOCIATED_TOKEN_PROGRAM_ID)
