from __future__ import annotations
import logging
import math
from typing import Iterable, Optional

import pandas as pd

from core.formatting import bps, money, pct
from core.models import (
    ComparisonInput,
    ComparisonResult,
    GrossMode,
    ScenarioResult,
    Structure,
)
from core import config
from core.presets import BPS_PER_UNIT, MONTHS_PER_YEAR

logger = logging.getLogger(__name__)


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Form fields are blank (``None``) while the user is typing and may briefly
    hold ``nan`` or ``inf``.  This mirrors the spreadsheet ``NZ()`` function so
    later math never sees a missing or non-finite number.
    """

    if x is None:
        return default
    try:
        v = float(x)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(v):
        return default
    return v


def clamp_min(x, lo=0.0):
    """``nz(x)`` floored at ``lo``."""
    return max(lo, nz(x))


def clamp_range(x, lo, hi):
    """``nz(x)`` limited to the closed range ``[lo, hi]``."""
    return min(hi, max(lo, nz(x)))


def resolve_target_flat_fee(value: Optional[float]) -> float:
    """Return the flat fee to apply, falling back to the plan default.

    The fee is plan configuration rather than typed input, so it is not
    clamped; a negative value is reported by ``core.rules`` instead.  A
    non-finite fee is treated as missing.
    """
    if value is None or not math.isfinite(value):
        return config.settings.TARGET_FLAT_FEE
    return float(value)


def gross_per_loan(inp: ComparisonInput) -> float:
    """Gross commission per loan, shared by both plans."""
    if inp.gross_mode is GrossMode.BPS:
        return clamp_min(inp.avg_loan_amount) * (clamp_min(inp.gross_bps) / BPS_PER_UNIT)
    if inp.gross_mode is GrossMode.DOLLAR:
        return clamp_min(inp.gross_dollar)
    raise ValueError(f"Unknown gross mode: {inp.gross_mode!r}")


def current_per_loan_raw(inp: ComparisonInput, gross: float) -> float:
    """Current-plan payout per loan before the per-file fee."""
    if inp.structure is Structure.BPS:
        return clamp_min(inp.avg_loan_amount) * (clamp_min(inp.current_payout_bps) / BPS_PER_UNIT)
    if inp.structure is Structure.SPLIT:
        return gross * (clamp_range(inp.current_split_pct, 0.0, 100.0) / 100)
    raise ValueError(f"Unknown payout structure: {inp.structure!r}")


def _scenario(per_loan: float, loans: float, note: str) -> ScenarioResult:
    monthly = per_loan * loans
    return ScenarioResult(
        per_loan=per_loan,
        monthly=monthly,
        annual=monthly * MONTHS_PER_YEAR,
        note=note,
    )


def _gross_note(inp: ComparisonInput, gross: float) -> str:
    if inp.gross_mode is GrossMode.BPS:
        return f"{bps(clamp_min(inp.gross_bps))} of {money(clamp_min(inp.avg_loan_amount))} = {money(gross)} gross"
    return f"{money(gross)} gross per loan"


def _current_note(inp: ComparisonInput, gross: float, fee: float) -> str:
    if inp.structure is Structure.BPS:
        base = f"{bps(clamp_min(inp.current_payout_bps))} of {money(clamp_min(inp.avg_loan_amount))}"
    else:
        base = f"{pct(clamp_range(inp.current_split_pct, 0.0, 100.0))} split of {money(gross)} gross"
    return f"{base}, less {money(fee)} per-file fee"


def evaluate(inp: ComparisonInput) -> ComparisonResult:
    """Compare the current plan against the flat-fee plan.

    Never raises for numeric content: negative, blank and non-finite values
    are clamped to zero and the split percentage to ``[0, 100]``.  Both plans
    share one gross-per-loan figure so the comparison isolates the payout
    structure and fees.  Per-loan figures are floored at zero after fees;
    monthly is ``per_loan * loans_per_month`` and annual is ``monthly * 12``.
    """

    flat_fee = resolve_target_flat_fee(inp.target_flat_fee)
    loans = clamp_min(inp.loans_per_month)

    gross = gross_per_loan(inp)
    current_fee = clamp_min(inp.current_per_file_fee)
    current = _scenario(
        max(0.0, current_per_loan_raw(inp, gross) - current_fee),
        loans,
        _current_note(inp, gross, current_fee),
    )
    target = _scenario(
        max(0.0, gross - flat_fee),
        loans,
        f"{_gross_note(inp, gross)}, less {money(flat_fee)} flat fee",
    )
    result = ComparisonResult(
        current=current,
        target=target,
        delta_annual=target.annual - current.annual,
        gross_per_loan=gross,
        target_flat_fee=flat_fee,
    )
    logger.debug(
        "evaluated comparison gross=%.2f current=%.2f target=%.2f delta_annual=%.2f",
        gross,
        current.per_loan,
        target.per_loan,
        result.delta_annual,
    )
    return result


def comparison_table(result: ComparisonResult) -> pd.DataFrame:
    """One row per plan for display and CSV export."""
    rows = []
    for plan, s in (("Current", result.current), ("Flat Fee", result.target)):
        rows.append(
            {
                "Plan": plan,
                "PerLoan": s.per_loan,
                "Monthly": s.monthly,
                "Annual": s.annual,
                "Note": s.note,
            }
        )
    return pd.DataFrame(rows, columns=["Plan", "PerLoan", "Monthly", "Annual", "Note"])


def volume_sensitivity(inp: ComparisonInput, volumes: Iterable[float]) -> pd.DataFrame:
    """Re-run the comparison at each monthly loan count in ``volumes``.

    Everything except ``loans_per_month`` is held fixed, which shows how the
    annual gap between the plans widens with production.
    """

    rows = []
    for v in volumes:
        res = evaluate(inp.model_copy(update={"loans_per_month": v}))
        rows.append(
            {
                "LoansPerMonth": clamp_min(v),
                "CurrentAnnual": res.current.annual,
                "TargetAnnual": res.target.annual,
                "DeltaAnnual": res.delta_annual,
            }
        )
    return pd.DataFrame(
        rows, columns=["LoansPerMonth", "CurrentAnnual", "TargetAnnual", "DeltaAnnual"]
    )


def breakeven_split_pct(inp: ComparisonInput) -> Optional[float]:
    """Split % of gross at which the current plan pays what the flat fee plan pays.

    The current per-file fee is taken into account.  Returns ``None`` when the
    gross is zero.  Values above 100 mean no split can match the flat fee plan.
    """

    gross = gross_per_loan(inp)
    if gross <= 0:
        return None
    target = max(0.0, gross - resolve_target_flat_fee(inp.target_flat_fee))
    return (target + clamp_min(inp.current_per_file_fee)) / gross * 100


def breakeven_flat_fee(inp: ComparisonInput) -> float:
    """Flat fee at which the flat fee plan pays what the current plan pays.

    Negative when the current plan already pays more than the gross.
    """

    res = evaluate(inp)
    return res.gross_per_loan - res.current.per_loan
