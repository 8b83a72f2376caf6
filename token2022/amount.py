"""Raw amount <-> UI amount transforms.

Interest-bearing mints accrue continuously compounded interest over two
rate regimes; scaled-UI mints multiply by a configured factor. Both run
in IEEE-754 doubles and render UI amounts the way JavaScript's
``Number#toString`` does, so results agree with other client SDKs.
"""

from __future__ import annotations

import math
from decimal import Decimal

from token2022.errors import InvalidTimespanError, InvalidUiAmountError
from token2022.extension_type import ExtensionType
from token2022.extensions import InterestBearingConfig, ScaledUiAmountConfig
from token2022.state import Mint

ONE_IN_BASIS_POINTS = 10_000
SECONDS_PER_YEAR = 60 * 60 * 24 * 365.24


def format_ui_amount(value: float) -> str:
    """Format a double like ``Number.prototype.toString`` (shortest round-trip)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # value == 0.digits * 10**n

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def _parse_ui_amount(ui_amount: str) -> float:
    try:
        return float(ui_amount)
    except ValueError:
        raise InvalidUiAmountError(f"not a number: {ui_amount!r}") from None


def _trunc(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.trunc(value))


def _to_raw_amount(value: float, ui_amount: str) -> int:
    if not math.isfinite(value):
        raise InvalidUiAmountError(f"UI amount {ui_amount!r} has no finite raw amount")
    return int(math.trunc(value))


# ---------------------------------------------------------------------------
# Interest bearing
# ---------------------------------------------------------------------------


def _exponent_for_times_and_rate(t1: int, t2: int, rate: int) -> float:
    timespan = t2 - t1
    if timespan < 0:
        raise InvalidTimespanError(f"end time {t2} is before start time {t1}")
    return math.exp(rate * timespan / (SECONDS_PER_YEAR * ONE_IN_BASIS_POINTS))


def calculate_total_scale(
    current_timestamp: int,
    last_update_timestamp: int,
    initialization_timestamp: int,
    pre_update_average_rate: int,
    current_rate: int,
) -> float:
    """Growth factor accrued from initialization up to ``current_timestamp``.

    The pre-update average rate applies between initialization and the last
    rate update, the current rate from the last update onward.
    """
    pre_update = _exponent_for_times_and_rate(
        initialization_timestamp, last_update_timestamp, pre_update_average_rate
    )
    post_update = _exponent_for_times_and_rate(
        last_update_timestamp, current_timestamp, current_rate
    )
    return pre_update * post_update


def amount_to_ui_amount_for_interest_bearing_mint(
    amount: int,
    decimals: int,
    current_timestamp: int,
    last_update_timestamp: int,
    initialization_timestamp: int,
    pre_update_average_rate: int,
    current_rate: int,
) -> str:
    total_scale = calculate_total_scale(
        current_timestamp,
        last_update_timestamp,
        initialization_timestamp,
        pre_update_average_rate,
        current_rate,
    )
    scaled_amount = float(amount) * total_scale
    return format_ui_amount(_trunc(scaled_amount) / math.pow(10, decimals))


def ui_amount_to_amount_for_interest_bearing_mint(
    ui_amount: str,
    decimals: int,
    current_timestamp: int,
    last_update_timestamp: int,
    initialization_timestamp: int,
    pre_update_average_rate: int,
    current_rate: int,
) -> int:
    ui_amount_scaled = _parse_ui_amount(ui_amount) * math.pow(10, decimals)
    total_scale = calculate_total_scale(
        current_timestamp,
        last_update_timestamp,
        initialization_timestamp,
        pre_update_average_rate,
        current_rate,
    )
    return _to_raw_amount(ui_amount_scaled / total_scale, ui_amount)


# ---------------------------------------------------------------------------
# Scaled UI amount
# ---------------------------------------------------------------------------


def get_scaled_ui_multiplier(config: ScaledUiAmountConfig, unix_timestamp: int) -> float:
    """The multiplier in force at ``unix_timestamp``."""
    return config.current_multiplier(unix_timestamp)


def amount_to_ui_amount_for_scaled_ui_amount_mint(
    amount: int, decimals: int, multiplier: float
) -> str:
    scaled_amount = float(amount) * multiplier
    return format_ui_amount(_trunc(scaled_amount) / math.pow(10, decimals))


def ui_amount_to_amount_for_scaled_ui_amount_mint(
    ui_amount: str, decimals: int, multiplier: float
) -> int:
    ui_amount_scaled = _parse_ui_amount(ui_amount) * math.pow(10, decimals)
    if multiplier == 0:
        raise InvalidUiAmountError(f"UI amount {ui_amount!r} cannot be unscaled by a zero multiplier")
    return _to_raw_amount(ui_amount_scaled / multiplier, ui_amount)


# ---------------------------------------------------------------------------
# Mint-level dispatch
# ---------------------------------------------------------------------------


def amount_to_ui_amount_for_mint(mint: Mint, amount: int, unix_timestamp: int) -> str:
    """Render ``amount`` using whichever UI transform ``mint`` is configured with."""
    interest = mint.get_extension(ExtensionType.INTEREST_BEARING_CONFIG)
    if isinstance(interest, InterestBearingConfig):
        return amount_to_ui_amount_for_interest_bearing_mint(
            amount,
            mint.decimals,
            unix_timestamp,
            interest.last_update_timestamp,
            interest.initialization_timestamp,
            interest.pre_update_average_rate,
            interest.current_rate,
        )
    scaled = mint.get_extension(ExtensionType.SCALED_UI_AMOUNT_CONFIG)
    if isinstance(scaled, ScaledUiAmountConfig):
        return amount_to_ui_amount_for_scaled_ui_amount_mint(
            amount, mint.decimals, get_scaled_ui_multiplier(scaled, unix_timestamp)
        )
    return format_ui_amount(float(amount) / math.pow(10, mint.decimals))


def ui_amount_to_amount_for_mint(mint: Mint, ui_amount: str, unix_timestamp: int) -> int:
    interest = mint.get_extension(ExtensionType.INTEREST_BEARING_CONFIG)
    if isinstance(interest, InterestBearingConfig):
        return ui_amount_to_amount_for_interest_bearing_mint(
            ui_amount,
            mint.decimals,
            unix_timestamp,
            interest.last_update_timestamp,
            interest.initialization_timestamp,
            interest.pre_update_average_rate,
            interest.current_rate,
        )
    scaled = mint.get_extension(ExtensionType.SCALED_UI_AMOUNT_CONFIG)
    if isinstance(scaled, ScaledUiAmountConfig):
        return ui_amount_to_amount_for_scaled_ui_amount_mint(
            ui_amount, mint.decimals, get_scaled_ui_multiplier(scaled, unix_timestamp)
        )
    ui_amount_scaled = _parse_ui_amount(ui_amount) * math.pow(10, mint.decimals)
    return _to_raw_amount(ui_amount_scaled, ui_amount)
