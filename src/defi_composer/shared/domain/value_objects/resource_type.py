"""
Resource type value object

Classifies what flows through a port ("asset", "collateral", "stakeReceipt").
Immutable and carries the domain rule for port compatibility.

The compatibility rule is a deliberately permissive heuristic, not a
sound type system. Three tiers are tried in order and each later tier
is strictly more permissive than the one before it:

1. Case-insensitive exact match.
2. Hand-curated synonym table, looked up in both directions.
3. Shared common root ("asset", "token", "receipt", "stake") contained
   in both tags.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple


# Synonym rows keyed by lowercase tag. Rows are not symmetric, lookups
# check both directions. Lowercase keys also make the camelCase receipt
# rows reachable (loanReceipt ~ debt is compatible here).
COMPATIBILITY_TABLE: Dict[str, FrozenSet[str]] = {
    name.lower(): frozenset(t.lower() for t in synonyms)
    for name, synonyms in {
        # Asset-like
        "asset": ["token", "liquidity", "coin", "currency", "collateral", "stakeAsset", "stakeReceipt", "receipt"],
        "token": ["asset", "liquidity", "coin", "currency", "collateral", "stakeAsset", "stakeReceipt", "receipt"],
        "coin": ["asset", "token", "liquidity", "currency", "collateral"],
        "currency": ["asset", "token", "liquidity", "coin", "collateral"],
        "liquidity": ["token", "asset", "coin", "currency"],
        "collateral": ["asset", "token", "coin", "currency"],
        # Staking
        "stake": ["token", "asset", "stakeAsset"],
        "stakeAsset": ["token", "asset", "stake"],
        "stakeReceipt": ["receipt", "token", "asset"],
        "receipt": ["stakeReceipt", "token", "asset", "depositReceipt", "loanReceipt"],
        # Lending
        "loan": ["asset", "token", "debt"],
        "debt": ["loan", "asset", "token"],
        "depositReceipt": ["receipt", "token", "asset"],
        "loanReceipt": ["receipt", "debt", "loan"],
        # Yield
        "interest": ["yield", "rewards", "revenue"],
        "yield": ["interest", "rewards", "revenue"],
        "rewards": ["yield", "interest", "asset", "token", "revenue"],
        "revenue": ["yield", "interest", "rewards", "asset", "token"],
    }.items()
}

COMMON_ROOTS: Tuple[str, ...] = ("asset", "token", "receipt", "stake")


def _listed_as_synonym(tag: str, other: str) -> bool:
    return other in COMPATIBILITY_TABLE.get(tag, frozenset())


def _shares_common_root(tag: str, other: str) -> bool:
    return any(root in tag and root in other for root in COMMON_ROOTS)


def are_compatible(source: str, target: str) -> bool:
    """
    Decide whether a port tagged `source` may feed a port tagged `target`.

    Tiers short-circuit in order: exact (case-insensitive), synonym
    table (both directions), common-root containment.
    """
    source_lower = source.lower()
    target_lower = target.lower()

    if source_lower == target_lower:
        return True

    if _listed_as_synonym(source_lower, target_lower) or _listed_as_synonym(target_lower, source_lower):
        return True

    return _shares_common_root(source_lower, target_lower)


@dataclass(frozen=True)
class ResourceType:
    """
    Immutable resource type tag.

    Free-form domain string; the vocabulary used by the registry is a
    small closed set of DeFi tags.
    """
    name: str

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Resource type name cannot be empty")

    def is_compatible_with(self, other: 'ResourceType') -> bool:
        """Heuristic compatibility used when a connection is created."""
        return are_compatible(self.name, other.name)

    def matches_exactly(self, other: 'ResourceType') -> bool:
        """Strict, case-sensitive equality used by the composition validator."""
        return self.name == other.name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ResourceType(name='{self.name}')"


ASSET = ResourceType("asset")
COLLATERAL = ResourceType("collateral")
RECEIPT = ResourceType("receipt")
ASSET_A = ResourceType("assetA")
ASSET_B = ResourceType("assetB")
LP_TOKEN = ResourceType("lpToken")
STAKE_ASSET = ResourceType("stakeAsset")
REWARD_ASSET = ResourceType("rewardAsset")
STAKE_RECEIPT = ResourceType("stakeReceipt")
VAULT_SHARE = ResourceType("vaultShare")


def get_resource_type(name: str) -> ResourceType:
    """Factory function to get a known resource type or create one."""
    known_types = {
        t.name: t for t in (
            ASSET, COLLATERAL, RECEIPT, ASSET_A, ASSET_B, LP_TOKEN,
            STAKE_ASSET, REWARD_ASSET, STAKE_RECEIPT, VAULT_SHARE,
        )
    }
    return known_types.get(name, ResourceType(name))
