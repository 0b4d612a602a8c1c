"""
Move templates

One fixed template per primitive kind. A template reads the primitive's
own parameter values and returns its struct plus its lifecycle functions
(initialize, deposit-like, primary action). Connections never influence
a template.

Numeric parameters are embedded as integer literals:
- percentages in basis points (5% -> 500), rounded half-up
- day counts in seconds (30 days -> 2592000)
- enum tags as their index in the allowed values
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Optional, Tuple

from defi_composer.features.codegen.domain import FieldIR, FunctionIR, ParamIR, StatementIR, StructIR
from defi_composer.features.primitives.domain import Primitive, PrimitiveKind, PrimitiveTemplate
from defi_composer.utils.message import Log

SECONDS_PER_DAY = 86400
BASIS_POINTS_PER_PERCENT = 100

ACCOUNT = ParamIR("account", "&signer")
AMOUNT = ParamIR("amount", "u64")
OWNER = "signer::address_of(account)"


def format_number(value: Any) -> str:
    """Shortest plain rendering of a number (5.0 -> "5", 0.30 -> "0.3")."""
    return format(Decimal(str(value)).normalize(), "f")


def to_basis_points(percent: Any) -> int:
    return int((Decimal(str(percent)) * BASIS_POINTS_PER_PERCENT).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_seconds(days: Any) -> int:
    return int((Decimal(str(days)) * SECONDS_PER_DAY).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class PrimitiveParameters:
    """
    Read access to a primitive's parameter values for a template.

    Unset values fall back to the template default so the generator
    always produces complete output; the validator is what reports them.
    """

    def __init__(self, primitive: Primitive, template: Optional[PrimitiveTemplate] = None):
        self.primitive = primitive
        self.template = template

    def raw(self, parameter_id: str) -> Any:
        value = self.primitive.value_of(parameter_id)
        if value is not None:
            return value

        definition = self.template.get_parameter(parameter_id) if self.template else None
        default = definition.default if definition else None
        Log.warning(
            f"MoveTemplates: '{parameter_id}' is unset on {self.primitive.label}, "
            f"generating with default {default!r}"
        )
        return default

    def asset(self, parameter_id: str) -> str:
        return str(self.raw(parameter_id) or "").upper()

    def percent(self, parameter_id: str) -> Tuple[int, str]:
        """Basis points literal and its original-value comment."""
        value = self.raw(parameter_id) or 0
        return to_basis_points(value), f"{format_number(value)}%"

    def days(self, parameter_id: str) -> Tuple[int, str]:
        value = self.raw(parameter_id) or 0
        return to_seconds(value), f"{format_number(value)} days"

    def enum_index(self, parameter_id: str) -> Tuple[int, str]:
        value = self.raw(parameter_id)
        definition = self.template.get_parameter(parameter_id) if self.template else None
        allowed = definition.constraints.allowed_values if definition else ()
        if value in allowed:
            return allowed.index(value), str(value)
        return 0, str(value)


# ----------------------------------------------------------------------
# Shared statement builders
# ----------------------------------------------------------------------

def _move_to(struct_name: str, initializers: List[Tuple[str, Any, Optional[str]]]) -> List[StatementIR]:
    statements = [StatementIR(f"move_to(account, {struct_name} {{")]
    for name, value, comment in initializers:
        statements.append(StatementIR(f"{name}: {value},", comment=comment, depth=1))
    statements.append(StatementIR("});"))
    return statements


def _borrow(binding: str, struct_name: str) -> StatementIR:
    return StatementIR(f"let {binding} = borrow_global_mut<{struct_name}>({OWNER});")


def _payout(coins: str) -> StatementIR:
    return StatementIR(f"coin::deposit({OWNER}, {coins});")


def _coin(asset: str) -> str:
    return f"coin::Coin<{asset}>"


def _zero(asset: str) -> str:
    return f"coin::zero<{asset}>()"


# ----------------------------------------------------------------------
# Per-kind templates
# ----------------------------------------------------------------------

def lending_pool_template(params: PrimitiveParameters) -> Tuple[StructIR, List[FunctionIR]]:
    asset = params.asset("assetType")
    interest_rate, interest_comment = params.percent("interestRate")
    collateral_ratio, collateral_comment = params.percent("collateralRatio")
    threshold, threshold_comment = params.percent("liquidationThreshold")

    struct = StructIR(
        name="LendingPool",
        fields=(
            FieldIR("reserve", _coin(asset)),
            FieldIR("interest_rate", "u64", interest_comment),
            FieldIR("collateral_ratio", "u64", collateral_comment),
            FieldIR("liquidation_threshold", "u64", threshold_comment),
        ),
    )
    functions = [
        FunctionIR(
            name="initialize_lending_pool",
            params=(ACCOUNT,),
            comment="Initialize lending pool",
            body=tuple(_move_to("LendingPool", [
                ("reserve", _zero(asset), None),
                ("interest_rate", interest_rate, interest_comment),
                ("collateral_ratio", collateral_ratio, collateral_comment),
                ("liquidation_threshold", threshold, threshold_comment),
            ])),
        ),
        FunctionIR(
            name="deposit",
            params=(ACCOUNT, AMOUNT),
            acquires=("LendingPool",),
            comment="Deposit to lending pool",
            body=(
                StatementIR(f"let deposit_coins = coin::withdraw<{asset}>(account, amount);"),
                _borrow("lending_pool", "LendingPool"),
                StatementIR("coin::merge(&mut lending_pool.reserve, deposit_coins);"),
            ),
        ),
        FunctionIR(
            name="borrow",
            params=(ACCOUNT, AMOUNT),
            acquires=("LendingPool",),
            comment="Borrow from lending pool",
            body=(
                _borrow("lending_pool", "LendingPool"),
                StatementIR("let coins = coin::extract(&mut lending_pool.reserve, amount);"),
                _payout("coins"),
            ),
        ),
    ]
    return struct, functions


def amm_pool_template(params: PrimitiveParameters) -> Tuple[StructIR, List[FunctionIR]]:
    asset_a = params.asset("assetTypeA")
    asset_b = params.asset("assetTypeB")
    fee, fee_comment = params.percent("feePercent")

    struct = StructIR(
        name="AmmPool",
        fields=(
            FieldIR("reserve_a", _coin(asset_a)),
            FieldIR("reserve_b", _coin(asset_b)),
            FieldIR("fee_percent", "u64", fee_comment),
            FieldIR("lp_supply", "u64"),
        ),
    )
    functions = [
        FunctionIR(
            name="initialize_amm_pool",
            params=(ACCOUNT,),
            comment="Initialize AMM pool",
            body=tuple(_move_to("AmmPool", [
                ("reserve_a", _zero(asset_a), None),
                ("reserve_b", _zero(asset_b), None),
                ("fee_percent", fee, fee_comment),
                ("lp_supply", 0, None),
            ])),
        ),
        FunctionIR(
            name="add_liquidity",
            params=(ACCOUNT, ParamIR("amount_a", "u64"), ParamIR("amount_b", "u64")),
            acquires=("AmmPool",),
            comment="Add liquidity to AMM pool",
            body=(
                StatementIR(f"let coins_a = coin::withdraw<{asset_a}>(account, amount_a);"),
                StatementIR(f"let coins_b = coin::withdraw<{asset_b}>(account, amount_b);"),
                _borrow("amm_pool", "AmmPool"),
                StatementIR("coin::merge(&mut amm_pool.reserve_a, coins_a);"),
                StatementIR("coin::merge(&mut amm_pool.reserve_b, coins_b);"),
                StatementIR("amm_pool.lp_supply = amm_pool.lp_supply + ((amount_a * amount_b) as u64);"),
            ),
        ),
        FunctionIR(
            name="swap_a_to_b",
            params=(ACCOUNT, ParamIR("amount_in", "u64")),
            acquires=("AmmPool",),
            comment="Swap in AMM pool",
            body=(
                StatementIR(f"let coins_in = coin::withdraw<{asset_a}>(account, amount_in);"),
                _borrow("amm_pool", "AmmPool"),
                StatementIR("coin::merge(&mut amm_pool.reserve_a, coins_in);"),
                StatementIR("let reserve_a = coin::value(&amm_pool.reserve_a);"),
                StatementIR("let reserve_b = coin::value(&amm_pool.reserve_b);"),
                StatementIR("let amount_out = (amount_in * reserve_b) / (reserve_a + amount_in);"),
                StatementIR("let fee = (amount_out * amm_pool.fee_percent) / 10000;", comment="basis points"),
                StatementIR("let amount_out = amount_out - fee;"),
                StatementIR("let coins_out = coin::extract(&mut amm_pool.reserve_b, amount_out);"),
                _payout("coins_out"),
            ),
        ),
    ]
    return struct, functions


def staking_template(params: PrimitiveParameters) -> Tuple[StructIR, List[FunctionIR]]:
    stake_asset = params.asset("assetType")
    reward_asset = params.asset("rewardAssetType")
    reward_rate, reward_comment = params.percent("rewardRate")
    lock_period, lock_comment = params.days("lockPeriod")

    struct = StructIR(
        name="StakingPool",
        fields=(
            FieldIR("staked", _coin(stake_asset)),
            FieldIR("rewards", _coin(reward_asset)),
            FieldIR("reward_rate", "u64", reward_comment),
            FieldIR("lock_period", "u64", lock_comment),
        ),
    )
    functions = [
        FunctionIR(
            name="initialize_staking_pool",
            params=(ACCOUNT,),
            comment="Initialize staking pool",
            body=tuple(_move_to("StakingPool", [
                ("staked", _zero(stake_asset), None),
                ("rewards", _zero(reward_asset), None),
                ("reward_rate", reward_rate, reward_comment),
                ("lock_period", lock_period, lock_comment),
            ])),
        ),
        FunctionIR(
            name="stake",
            params=(ACCOUNT, AMOUNT),
            acquires=("StakingPool",),
            comment="Stake tokens",
            body=(
                StatementIR(f"let stake_coins = coin::withdraw<{stake_asset}>(account, amount);"),
                _borrow("staking_pool", "StakingPool"),
                StatementIR("coin::merge(&mut staking_pool.staked, stake_coins);"),
            ),
        ),
        FunctionIR(
            name="claim_rewards",
            params=(ACCOUNT,),
            acquires=("StakingPool",),
            comment="Claim rewards",
            body=(
                _borrow("staking_pool", "StakingPool"),
                StatementIR("let staked_amount = coin::value(&staking_pool.staked);"),
                StatementIR(
                    "let rewards_amount = (staked_amount * staking_pool.reward_rate) / 10000 / 365;",
                    comment="daily share of the annual rate",
                ),
                StatementIR("let reward_coins = coin::extract(&mut staking_pool.rewards, rewards_amount);"),
                _payout("reward_coins"),
            ),
        ),
    ]
    return struct, functions


def vault_template(params: PrimitiveParameters) -> Tuple[StructIR, List[FunctionIR]]:
    asset = params.asset("assetType")
    strategy, strategy_comment = params.enum_index("strategy")
    performance_fee, performance_comment = params.percent("performanceFee")
    withdrawal_fee, withdrawal_comment = params.percent("withdrawalFee")

    struct = StructIR(
        name="Vault",
        fields=(
            FieldIR("assets", _coin(asset)),
            FieldIR("strategy", "u8", strategy_comment),
            FieldIR("performance_fee", "u64", performance_comment),
            FieldIR("withdrawal_fee", "u64", withdrawal_comment),
        ),
    )
    functions = [
        FunctionIR(
            name="initialize_vault",
            params=(ACCOUNT,),
            comment="Initialize vault",
            body=tuple(_move_to("Vault", [
                ("assets", _zero(asset), None),
                ("strategy", strategy, strategy_comment),
                ("performance_fee", performance_fee, performance_comment),
                ("withdrawal_fee", withdrawal_fee, withdrawal_comment),
            ])),
        ),
        FunctionIR(
            name="deposit_to_vault",
            params=(ACCOUNT, AMOUNT),
            acquires=("Vault",),
            comment="Deposit to vault",
            body=(
                StatementIR(f"let deposit_coins = coin::withdraw<{asset}>(account, amount);"),
                _borrow("vault", "Vault"),
                StatementIR("coin::merge(&mut vault.assets, deposit_coins);"),
            ),
        ),
        FunctionIR(
            name="withdraw_from_vault",
            params=(ACCOUNT, AMOUNT),
            acquires=("Vault",),
            comment="Withdraw from vault",
            body=(
                _borrow("vault", "Vault"),
                StatementIR("let fee = (amount * vault.withdrawal_fee) / 10000;"),
                StatementIR("let withdraw_amount = amount - fee;"),
                StatementIR("let coins = coin::extract(&mut vault.assets, withdraw_amount);"),
                _payout("coins"),
            ),
        ),
    ]
    return struct, functions


KindTemplate = Callable[[PrimitiveParameters], Tuple[StructIR, List[FunctionIR]]]

KIND_TEMPLATES: Dict[PrimitiveKind, KindTemplate] = {
    PrimitiveKind.LENDING_POOL: lending_pool_template,
    PrimitiveKind.AMM_POOL: amm_pool_template,
    PrimitiveKind.STAKING: staking_template,
    PrimitiveKind.VAULT: vault_template,
}
