from __future__ import annotations
import math
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from core.calculators import (
    clamp_min,
    current_per_loan_raw,
    gross_per_loan,
    resolve_target_flat_fee,
)
from core.models import ComparisonInput, Structure


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


# Fields the engine floors at zero.
CLAMPED_FIELDS = (
    "avg_loan_amount",
    "loans_per_month",
    "gross_bps",
    "gross_dollar",
    "current_payout_bps",
    "current_per_file_fee",
)

NUMERIC_FIELDS = CLAMPED_FIELDS + ("current_split_pct", "target_flat_fee")


def _non_finite(v) -> bool:
    return v is not None and not math.isfinite(v)


def review_inputs(inp: ComparisonInput) -> List[RuleResult]:
    """Report what ``evaluate`` silently corrected or floored.

    This never changes the comparison; it lets the form flag values the user
    probably did not mean.
    """
    res: List[RuleResult] = []

    bad = [f for f in NUMERIC_FIELDS if _non_finite(getattr(inp, f))]
    if bad:
        res.append(
            RuleResult(
                code="NON_FINITE_INPUT",
                severity="warn",
                message="Some values are not finite numbers and were treated as 0.",
                context={"fields": bad},
            )
        )

    negative = [
        f for f in CLAMPED_FIELDS if getattr(inp, f) is not None and getattr(inp, f) < 0
    ]
    if negative:
        res.append(
            RuleResult(
                code="NEGATIVE_INPUT_CLAMPED",
                severity="warn",
                message="Negative values were treated as 0.",
                context={"fields": negative},
            )
        )

    split = inp.current_split_pct
    if (
        inp.structure is Structure.SPLIT
        and split is not None
        and math.isfinite(split)
        and not 0 <= split <= 100
    ):
        res.append(
            RuleResult(
                code="SPLIT_OUT_OF_RANGE",
                severity="warn",
                message="Split % must be between 0 and 100; the nearest bound was used.",
                context={"actual": split},
            )
        )

    flat_fee = resolve_target_flat_fee(inp.target_flat_fee)
    if flat_fee < 0:
        res.append(
            RuleResult(
                code="NEGATIVE_TARGET_FEE",
                severity="warn",
                message="Flat fee is negative; the flat fee plan pays more than gross.",
                context={"flat_fee": flat_fee},
            )
        )

    if clamp_min(inp.loans_per_month) == 0:
        res.append(
            RuleResult(
                code="NO_VOLUME",
                severity="info",
                message="No loans per month entered; monthly and annual totals are 0.",
            )
        )

    gross = gross_per_loan(inp)
    if gross <= 0:
        res.append(
            RuleResult(
                code="NO_GROSS",
                severity="critical",
                message="Gross commission per loan is 0; the comparison is not meaningful.",
            )
        )
        return res

    if flat_fee >= gross:
        res.append(
            RuleResult(
                code="TARGET_FEE_EXCEEDS_GROSS",
                severity="warn",
                message="Flat fee is at or above gross; flat fee plan per loan is 0.",
                context={"flat_fee": flat_fee, "gross": gross},
            )
        )

    raw = current_per_loan_raw(inp, gross)
    fee = clamp_min(inp.current_per_file_fee)
    if fee > 0 and fee >= raw:
        res.append(
            RuleResult(
                code="CURRENT_FEE_EXCEEDS_PAYOUT",
                severity="warn",
                message="Per-file fee is at or above the current payout; current plan per loan is 0.",
                context={"fee": fee, "payout": raw},
            )
        )

    if raw > gross:
        res.append(
            RuleResult(
                code="CURRENT_EXCEEDS_GROSS",
                severity="info",
                message="Current payout is above the gross commission per loan.",
                context={"payout": raw, "gross": gross},
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
