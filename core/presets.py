DISCLAIMER = ("This comparison is an estimate of per-file take-home under two compensation plans. "
"It assumes the same gross commission per loan under both plans and scales monthly figures linearly to a year. "
"It does not model taxes, splits on bonuses, chargebacks or volume changes. Confirm plan terms in writing "
"before making a decision.")

# Per-file fee charged by the flat-fee plan.
DEFAULT_TARGET_FLAT_FEE = 795.0

BPS_PER_UNIT = 10000.0
MONTHS_PER_YEAR = 12

# Starting values for a fresh form.
FORM_DEFAULTS = {
    "avg_loan_amount": 400000.0,
    "loans_per_month": 4.0,
    "gross_mode": "bps",
    "gross_bps": 200.0,
    "gross_dollar": 8000.0,
    "structure": "split",
    "current_payout_bps": 100.0,
    "current_split_pct": 70.0,
    "current_per_file_fee": 0.0,
}

GROSS_MODE_LABELS = {"bps": "Basis points", "dollar": "Dollars per loan"}
STRUCTURE_LABELS = {"bps": "Flat bps of loan amount", "split": "Split % of gross"}

SENSITIVITY_VOLUMES = [1, 2, 3, 4, 5, 6, 8, 10, 12, 15]
