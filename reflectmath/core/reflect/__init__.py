"""`reflect`: share/balance conversion engine for a fee-on-transfer token.

- integer-only, built on the 256/512-bit wide kernel,
- immutable requests and results (frozen dataclasses),
- rounding fixup so truncated shares still hit exact balance expectations,
- fail-closed guards and invariant checks for callers that want them.

Public API:
- `get_transfer_shares(amount, fee_rate, total_supply, total_shares, from_shares, to_shares)`
- `get_transfer_all_shares(fee_rate, total_supply, total_shares, from_shares, to_shares)`
- `get_deliver_shares(amount, total_supply, total_shares, from_shares)`
- `get_burn_shares(...)` (raises `BurnNotImplementedError`)
- `transfer_or_raise` / `transfer_all_or_raise` / `deliver_or_raise`
"""

from .engine import (
    deliver_or_raise,
    get_burn_shares,
    get_deliver_shares,
    get_transfer_all_shares,
    get_transfer_shares,
    transfer_all_or_raise,
    transfer_or_raise,
)
from .errors import (
    BurnNotImplementedError,
    DivisionByZero,
    Overflow,
    ReflectError,
    ReflectGuardError,
    ReflectInvariantError,
    Underflow,
    WideArithmeticError,
)
from .math import BASIS, to_balance
from .params import DEFAULT_PARAMS, EngineParams, load_params
from .types import (
    DeliverRequest,
    DeliverShares,
    TransferAllRequest,
    TransferAllShares,
    TransferRequest,
    TransferShares,
)

__all__ = [
    "get_transfer_shares",
    "get_transfer_all_shares",
    "get_deliver_shares",
    "get_burn_shares",
    "transfer_or_raise",
    "transfer_all_or_raise",
    "deliver_or_raise",
    "BASIS",
    "to_balance",
    "EngineParams",
    "DEFAULT_PARAMS",
    "load_params",
    "TransferRequest",
    "TransferAllRequest",
    "DeliverRequest",
    "TransferShares",
    "TransferAllShares",
    "DeliverShares",
    "WideArithmeticError",
    "DivisionByZero",
    "Overflow",
    "Underflow",
    "ReflectError",
    "ReflectGuardError",
    "ReflectInvariantError",
    "BurnNotImplementedError",
]
