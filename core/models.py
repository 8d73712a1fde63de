from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class GrossMode(str, Enum):
    BPS = "bps"
    DOLLAR = "dollar"


class Structure(str, Enum):
    BPS = "bps"
    SPLIT = "split"


class ComparisonInput(BaseModel):
    """Raw form values for one comparison.

    Numeric fields are left unvalidated on purpose: blanks arrive as ``None``
    and half-typed values may be negative or out of range.  The engine clamps
    them; ``core.rules.review_inputs`` reports them.
    """

    model_config = ConfigDict(frozen=True)

    avg_loan_amount: Optional[float] = 0.0
    loans_per_month: Optional[float] = 0.0
    gross_mode: GrossMode = GrossMode.BPS
    gross_bps: Optional[float] = 0.0
    gross_dollar: Optional[float] = 0.0
    structure: Structure = Structure.SPLIT
    current_payout_bps: Optional[float] = 0.0
    current_split_pct: Optional[float] = 0.0
    current_per_file_fee: Optional[float] = 0.0
    # None means the plan default
    target_flat_fee: Optional[float] = None


class ScenarioResult(BaseModel):
    per_loan: float = 0.0
    monthly: float = 0.0
    annual: float = 0.0
    note: str = ""


class ComparisonResult(BaseModel):
    current: ScenarioResult
    target: ScenarioResult
    delta_annual: float = 0.0
    gross_per_loan: float = 0.0
    target_flat_fee: float = 0.0
