"""
Primitive Registry

Catalog of primitive kinds and their templates.
Provides template lookup, library search and primitive instantiation.
"""
from typing import Any, Dict, List, Optional, Union
import uuid

from defi_composer.shared.domain.errors import UnknownKindError
from defi_composer.shared.domain.value_objects.parameter_value import ParameterType
from defi_composer.shared.domain.value_objects.position import Position
from defi_composer.shared.domain.value_objects.resource_type import (
    ASSET, COLLATERAL, RECEIPT, ASSET_A, ASSET_B, LP_TOKEN,
    STAKE_ASSET, REWARD_ASSET, STAKE_RECEIPT, VAULT_SHARE,
)
from defi_composer.features.primitives.domain import (
    ParameterConstraints,
    ParameterDefinition,
    Port,
    PortDirection,
    PortSchema,
    Primitive,
    PrimitiveKind,
    PrimitiveTemplate,
)
from defi_composer.utils.message import Log

KindRef = Union[PrimitiveKind, str]


class PrimitiveRegistry:
    """
    Registry for primitive kinds.

    Kinds are registered once at start-up and only looked up afterwards.
    """

    def __init__(self):
        self._templates: Dict[PrimitiveKind, PrimitiveTemplate] = {}
        self._initialized = False
        Log.debug("PrimitiveRegistry: Initialized")

    def register(self, template: PrimitiveTemplate) -> None:
        """
        Register a primitive template.

        Args:
            template: PrimitiveTemplate instance
        """
        if template.kind in self._templates:
            Log.warning(f"PrimitiveRegistry: Overwriting existing kind: {template.kind.value}")

        self._templates[template.kind] = template
        Log.debug(f"PrimitiveRegistry: Registered kind '{template.kind.value}' ({template.name})")

    def get(self, kind: KindRef) -> Optional[PrimitiveTemplate]:
        """
        Get a template by kind (case-insensitive on the kind id).

        Returns:
            PrimitiveTemplate or None if not registered
        """
        if isinstance(kind, str):
            resolved = PrimitiveKind.from_string(kind)
            if resolved is None:
                return None
            kind = resolved
        return self._templates.get(kind)

    def template_for(self, kind: KindRef) -> PrimitiveTemplate:
        """
        Get a template by kind.

        Raises:
            UnknownKindError: If the kind is not registered
        """
        template = self.get(kind)
        if template is None:
            name = kind.value if isinstance(kind, PrimitiveKind) else str(kind)
            raise UnknownKindError(name, [k.value for k in self._templates])
        return template

    def list_all(self) -> List[PrimitiveTemplate]:
        """All registered templates in registration order."""
        return list(self._templates.values())

    def categories(self) -> List[str]:
        """Distinct categories in registration order."""
        seen: List[str] = []
        for template in self._templates.values():
            if template.category and template.category not in seen:
                seen.append(template.category)
        return seen

    def search(self, query: str = "", category: Optional[str] = None) -> List[PrimitiveTemplate]:
        """
        Search templates by name, description or tags, optionally within a category.

        Args:
            query: Search string, empty matches everything
            category: Category label to restrict to

        Returns:
            Matching templates in registration order
        """
        results = []
        for template in self._templates.values():
            if category and template.category != category:
                continue
            if query and not template.matches(query):
                continue
            results.append(template)
        return results

    def instantiate(self, kind: KindRef, position: Any = None) -> Primitive:
        """
        Create a primitive of the given kind.

        Allocates a fresh id, copies parameter defaults and allocates one
        port per schema entry, each with its own id.

        Raises:
            UnknownKindError: If the kind is not registered
        """
        template = self.template_for(kind)
        primitive_id = str(uuid.uuid4())

        parameters = {
            definition.id: definition.default_value()
            for definition in template.parameters
        }
        inputs = tuple(
            Port(
                id=str(uuid.uuid4()),
                primitive_id=primitive_id,
                direction=PortDirection.INPUT,
                resource_type=schema.resource_type,
                label=schema.label,
            )
            for schema in template.inputs
        )
        outputs = tuple(
            Port(
                id=str(uuid.uuid4()),
                primitive_id=primitive_id,
                direction=PortDirection.OUTPUT,
                resource_type=schema.resource_type,
                label=schema.label,
            )
            for schema in template.outputs
        )

        return Primitive(
            id=primitive_id,
            kind=template.kind,
            position=Position.of(position) if position is not None else Position(),
            label=template.name,
            description=template.description,
            parameters=parameters,
            inputs=inputs,
            outputs=outputs,
        )

    def initialize_default_kinds(self):
        """Register the four built-in DeFi kinds"""
        if self._initialized:
            return

        # Lending Pool
        self.register(PrimitiveTemplate(
            kind=PrimitiveKind.LENDING_POOL,
            name="Lending Pool",
            description="A lending pool that allows users to deposit assets and borrow against collateral",
            category="Lending",
            tags=("lending", "borrowing", "collateral"),
            parameters=(
                ParameterDefinition(
                    id="interestRate",
                    name="Interest Rate",
                    type=ParameterType.NUMBER,
                    default=5,
                    description="Annual interest rate for borrowing (in percentage)",
                    constraints=ParameterConstraints(minimum=0, maximum=100, required=True),
                    unit="%",
                ),
                ParameterDefinition(
                    id="collateralRatio",
                    name="Collateral Ratio",
                    type=ParameterType.NUMBER,
                    default=150,
                    description="Required collateral to loan ratio (in percentage)",
                    constraints=ParameterConstraints(minimum=100, maximum=500, required=True),
                    unit="%",
                ),
                ParameterDefinition(
                    id="liquidationThreshold",
                    name="Liquidation Threshold",
                    type=ParameterType.NUMBER,
                    default=120,
                    description="Threshold at which loans become eligible for liquidation (in percentage)",
                    constraints=ParameterConstraints(minimum=100, maximum=200, required=True),
                    unit="%",
                ),
                ParameterDefinition(
                    id="assetType",
                    name="Asset Type",
                    type=ParameterType.ASSET,
                    default="USDC",
                    description="Type of asset for this lending pool",
                    constraints=ParameterConstraints(required=True),
                ),
            ),
            inputs=(
                PortSchema(ASSET, "Deposit"),
                PortSchema(COLLATERAL, "Collateral"),
            ),
            outputs=(
                PortSchema(ASSET, "Loan"),
                PortSchema(RECEIPT, "Deposit Receipt"),
            ),
        ))

        # AMM Pool
        self.register(PrimitiveTemplate(
            kind=PrimitiveKind.AMM_POOL,
            name="AMM Pool",
            description="An automated market maker pool for swapping between two assets",
            category="Exchange",
            tags=("swap", "liquidity", "amm"),
            parameters=(
                ParameterDefinition(
                    id="feePercent",
                    name="Fee Percentage",
                    type=ParameterType.NUMBER,
                    default=0.3,
                    description="Fee percentage charged on swaps",
                    constraints=ParameterConstraints(minimum=0, maximum=10, required=True),
                    unit="%",
                ),
                ParameterDefinition(
                    id="assetTypeA",
                    name="Asset Type A",
                    type=ParameterType.ASSET,
                    default="USDC",
                    description="First asset in the pair",
                    constraints=ParameterConstraints(required=True),
                ),
                ParameterDefinition(
                    id="assetTypeB",
                    name="Asset Type B",
                    type=ParameterType.ASSET,
                    default="ETH",
                    description="Second asset in the pair",
                    constraints=ParameterConstraints(required=True),
                ),
            ),
            inputs=(
                PortSchema(ASSET_A, "Token A"),
                PortSchema(ASSET_B, "Token B"),
            ),
            outputs=(
                PortSchema(ASSET_A, "Token A Out"),
                PortSchema(ASSET_B, "Token B Out"),
                PortSchema(LP_TOKEN, "LP Token"),
            ),
        ))

        # Staking Pool
        self.register(PrimitiveTemplate(
            kind=PrimitiveKind.STAKING,
            name="Staking Pool",
            description="A staking pool that rewards users for locking up assets",
            category="Yield",
            tags=("staking", "rewards", "yield"),
            parameters=(
                ParameterDefinition(
                    id="rewardRate",
                    name="Reward Rate",
                    type=ParameterType.NUMBER,
                    default=10,
                    description="Annual reward rate (in percentage)",
                    constraints=ParameterConstraints(minimum=0, maximum=1000, required=True),
                    unit="%",
                ),
                ParameterDefinition(
                    id="lockPeriod",
                    name="Lock Period",
                    type=ParameterType.NUMBER,
                    default=30,
                    description="Required lock period in days",
                    constraints=ParameterConstraints(minimum=0, maximum=365 * 5, required=True),
                    unit="days",
                ),
                ParameterDefinition(
                    id="assetType",
                    name="Stake Asset",
                    type=ParameterType.ASSET,
                    default="APT",
                    description="Asset to stake",
                    constraints=ParameterConstraints(required=True),
                ),
                ParameterDefinition(
                    id="rewardAssetType",
                    name="Reward Asset",
                    type=ParameterType.ASSET,
                    default="APT",
                    description="Asset for rewards",
                    constraints=ParameterConstraints(required=True),
                ),
            ),
            inputs=(
                PortSchema(STAKE_ASSET, "Stake"),
            ),
            outputs=(
                PortSchema(REWARD_ASSET, "Rewards"),
                PortSchema(STAKE_RECEIPT, "Stake Receipt"),
            ),
        ))

        # Yield Vault
        self.register(PrimitiveTemplate(
            kind=PrimitiveKind.VAULT,
            name="Yield Vault",
            description="A yield-generating vault that automatically reinvests returns",
            category="Yield",
            tags=("vault", "yield", "auto-compound"),
            parameters=(
                ParameterDefinition(
                    id="strategy",
                    name="Yield Strategy",
                    type=ParameterType.ENUM,
                    default="conservative",
                    description="Strategy for generating yield",
                    constraints=ParameterConstraints(
                        allowed_values=("conservative", "moderate", "aggressive"),
                        required=True,
                    ),
                ),
                ParameterDefinition(
                    id="performanceFee",
                    name="Performance Fee",
                    type=ParameterType.NUMBER,
                    default=10,
                    description="Fee charged on profits (in percentage)",
                    constraints=ParameterConstraints(minimum=0, maximum=50, required=True),
                    unit="%",
                ),
                ParameterDefinition(
                    id="withdrawalFee",
                    name="Withdrawal Fee",
                    type=ParameterType.NUMBER,
                    default=0.1,
                    description="Fee charged on withdrawals (in percentage)",
                    constraints=ParameterConstraints(minimum=0, maximum=10, required=True),
                    unit="%",
                ),
                ParameterDefinition(
                    id="assetType",
                    name="Asset Type",
                    type=ParameterType.ASSET,
                    default="USDC",
                    description="Asset managed by this vault",
                    constraints=ParameterConstraints(required=True),
                ),
            ),
            inputs=(
                PortSchema(ASSET, "Deposit"),
            ),
            outputs=(
                PortSchema(VAULT_SHARE, "Vault Shares"),
                PortSchema(ASSET, "Yield"),
            ),
        ))

        self._initialized = True
        Log.info(f"PrimitiveRegistry: Initialized {len(self._templates)} default kinds")


# Global registry instance
_primitive_registry: Optional[PrimitiveRegistry] = None


def get_primitive_registry() -> PrimitiveRegistry:
    """
    Get the global primitive registry instance.

    Returns:
        PrimitiveRegistry with the default kinds registered
    """
    global _primitive_registry
    if _primitive_registry is None:
        _primitive_registry = PrimitiveRegistry()
        _primitive_registry.initialize_default_kinds()
    return _primitive_registry
