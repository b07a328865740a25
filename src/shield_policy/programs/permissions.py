"""
Policy Permission Checks

A policy is either a deny-list or an allow-list of identities. Consumers such
as transaction routers look at every policy attached to a piece of work and
ask whether a given identity may take part:

- Any DENY policy that lists the identity rejects it
- Otherwise an ALLOW policy that lists the identity admits it
- Otherwise the identity is admitted only when no ALLOW policy applies

An empty set of policies therefore allows everyone.

Based on: https://solana.com/docs/core/accounts
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from ..core.accounts import PermissionStrategy, decode_policy, decode_policy_identities, split_policy_data
from ..core.identity import Identity, IdentityLike, to_identity
from ..errors import PolicyNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Policy:
    """The parts of a policy account a permission check needs."""
    strategy: PermissionStrategy                                # Allow-list or deny-list
    identities: FrozenSet[Identity] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "strategy", PermissionStrategy(self.strategy))
        object.__setattr__(self, "identities", frozenset(to_identity(i) for i in self.identities))

    @classmethod
    def from_account_data(cls, data: bytes) -> 'Policy':
        """Build from stored policy bytes, header plus identity slots."""
        header, _ = split_policy_data(data)
        return cls(
            strategy=decode_policy(header).strategy,
            identities=frozenset(decode_policy_identities(data)),
        )

    def lists(self, identity: IdentityLike) -> bool:
        return to_identity(identity) in self.identities


def is_allowed(policies: Iterable[Policy], identity: IdentityLike) -> bool:
    """Decide whether `identity` passes every policy in `policies`."""
    identity = to_identity(identity)
    allow_applies = False
    allow_listed = False

    for policy in policies:
        listed = identity in policy.identities
        if policy.strategy is PermissionStrategy.DENY:
            if listed:
                return False
        else:
            allow_applies = True
            allow_listed = allow_listed or listed

    return allow_listed or not allow_applies


class PolicySnapshot:
    """
    Point-in-time view of many policies keyed by their account address.

    Typically filled from a program-accounts scan; checks then refer to
    policies by address instead of carrying their contents around.
    """

    def __init__(self, policies: Optional[Mapping[IdentityLike, Policy]] = None):
        self.policies: Dict[Identity, Policy] = {}
        for address, policy in (policies or {}).items():
            self.insert(address, policy)

    @classmethod
    def from_accounts(cls, accounts: Mapping[IdentityLike, bytes]) -> 'PolicySnapshot':
        """Parse raw policy account data keyed by address."""
        snapshot = cls({address: Policy.from_account_data(data) for address, data in accounts.items()})
        logger.debug("Loaded %d policies into snapshot", len(snapshot))
        return snapshot

    def insert(self, address: IdentityLike, policy: Policy) -> None:
        self.policies[to_identity(address)] = policy

    def get(self, address: IdentityLike) -> Policy:
        try:
            return self.policies[to_identity(address)]
        except KeyError:
            raise PolicyNotFound(f"No policy at {address}") from None

    def is_allowed(self, addresses: Iterable[IdentityLike], identity: IdentityLike) -> bool:
        """
        Check `identity` against the policies stored at `addresses`.

        Raises:
            PolicyNotFound: an address has no policy in this snapshot
        """
        return is_allowed([self.get(address) for address in addresses], identity)

    def __len__(self) -> int:
        return len(self.policies)

    def __contains__(self, address: IdentityLike) -> bool:
        return to_identity(address) in self.policies
