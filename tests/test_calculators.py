import math

import pytest

from core.calculators import (
    breakeven_flat_fee,
    breakeven_split_pct,
    clamp_min,
    clamp_range,
    comparison_table,
    evaluate,
    gross_per_loan,
    nz,
    resolve_target_flat_fee,
    volume_sensitivity,
)
from core import config
from core.models import ComparisonInput, GrossMode, Structure
from core.presets import DEFAULT_TARGET_FLAT_FEE


def _split_bps_gross(**kw):
    data = dict(
        avg_loan_amount=450000,
        loans_per_month=4,
        gross_mode="bps",
        gross_bps=200,
        structure="split",
        current_split_pct=70,
        current_per_file_fee=0,
        target_flat_fee=795,
    )
    data.update(kw)
    return ComparisonInput(**data)


def _bps_dollar_gross(**kw):
    data = dict(
        avg_loan_amount=400000,
        loans_per_month=5,
        gross_mode="dollar",
        gross_dollar=8000,
        structure="bps",
        current_payout_bps=120,
        current_per_file_fee=250,
        target_flat_fee=795,
    )
    data.update(kw)
    return ComparisonInput(**data)


def test_split_structure_with_bps_gross():
    res = evaluate(_split_bps_gross())
    assert res.gross_per_loan == pytest.approx(9000)
    assert res.current.per_loan == pytest.approx(6300)
    assert res.target.per_loan == pytest.approx(8205)
    assert res.current.annual == pytest.approx(6300 * 4 * 12)
    assert res.delta_annual == pytest.approx((8205 - 6300) * 4 * 12)


def test_bps_structure_with_dollar_gross_and_fee():
    res = evaluate(_bps_dollar_gross())
    assert res.current.per_loan == pytest.approx(4550)
    assert res.target.per_loan == pytest.approx(7205)
    assert res.target.monthly == pytest.approx(7205 * 5)


def test_degenerate_negative_inputs_floor_at_zero():
    inp = ComparisonInput(
        avg_loan_amount=-100,
        loans_per_month=-1,
        gross_bps=-50,
        gross_dollar=-1,
        current_payout_bps=-10,
        current_split_pct=150,
        current_per_file_fee=-500,
    )
    for mode in GrossMode:
        for structure in Structure:
            res = evaluate(inp.model_copy(update={"gross_mode": mode, "structure": structure}))
            assert res.current.per_loan == 0
            assert res.target.per_loan == 0
            assert res.delta_annual == 0


def test_zero_loans_per_month():
    res = evaluate(_split_bps_gross(loans_per_month=0))
    assert res.current.per_loan > 0 and res.target.per_loan > 0
    for s in (res.current, res.target):
        assert s.monthly == 0
        assert s.annual == 0
    assert res.delta_annual == 0


def test_missing_and_non_finite_values_treated_as_zero():
    inp = _split_bps_gross(avg_loan_amount=None, loans_per_month=float("nan"))
    res = evaluate(inp)
    assert res.gross_per_loan == 0
    assert res.current.monthly == 0
    inp = _bps_dollar_gross(gross_dollar=float("inf"))
    assert evaluate(inp).gross_per_loan == 0


def test_target_flat_fee_defaults_to_795():
    res = evaluate(_split_bps_gross(target_flat_fee=None))
    assert res.target_flat_fee == 795
    assert res.target.per_loan == pytest.approx(9000 - 795)
    assert resolve_target_flat_fee(float("nan")) == 795


def test_negative_target_flat_fee_is_not_clamped():
    res = evaluate(_split_bps_gross(target_flat_fee=-100))
    assert res.target.per_loan == pytest.approx(9100)


def test_fee_larger_than_payout_floors_at_zero():
    res = evaluate(_bps_dollar_gross(current_per_file_fee=10000, target_flat_fee=9000))
    assert res.current.per_loan == 0
    assert res.target.per_loan == 0


def test_gross_is_shared_regardless_of_current_plan():
    base = _split_bps_gross()
    expected = gross_per_loan(base)
    for structure in Structure:
        for split in (-5, 0, 35, 100, 250):
            for payout in (0, 80, 300):
                inp = base.model_copy(
                    update={
                        "structure": structure,
                        "current_split_pct": split,
                        "current_payout_bps": payout,
                    }
                )
                assert evaluate(inp).gross_per_loan == expected


def test_linear_scaling_and_delta_are_exact():
    for inp in (_split_bps_gross(loans_per_month=3.5), _bps_dollar_gross(loans_per_month=7)):
        res = evaluate(inp)
        for s in (res.current, res.target):
            assert s.monthly == s.per_loan * inp.loans_per_month
            assert s.annual == s.monthly * 12
        assert res.delta_annual == res.target.annual - res.current.annual


def test_clamps_are_idempotent():
    for x in (-10, 0, 42.5, 150, None, float("nan"), float("-inf"), "abc"):
        assert clamp_min(clamp_min(x)) == clamp_min(x)
        assert clamp_range(clamp_range(x, 0, 100), 0, 100) == clamp_range(x, 0, 100)
    assert clamp_range(150, 0, 100) == 100
    assert clamp_range(-3, 0, 100) == 0
    assert nz("12.5") == 12.5
    assert nz(math.inf, default=7.0) == 7.0


def test_in_range_inputs_give_identical_results_after_reclamping():
    inp = _split_bps_gross()
    again = inp.model_copy(
        update={
            "avg_loan_amount": clamp_min(inp.avg_loan_amount),
            "loans_per_month": clamp_min(inp.loans_per_month),
            "current_split_pct": clamp_range(inp.current_split_pct, 0, 100),
        }
    )
    assert evaluate(inp) == evaluate(again)


def test_evaluate_does_not_mutate_input():
    inp = _split_bps_gross(avg_loan_amount=-5)
    before = inp.model_dump()
    evaluate(inp)
    assert inp.model_dump() == before


def test_notes_reference_the_branch_used():
    res = evaluate(_split_bps_gross())
    assert "70% split" in res.current.note
    assert "$795 flat fee" in res.target.note
    assert "200 bps" in res.target.note
    res = evaluate(_bps_dollar_gross())
    assert "120 bps of $400,000" in res.current.note
    assert "$250 per-file fee" in res.current.note


def test_comparison_table_rows():
    df = comparison_table(evaluate(_split_bps_gross()))
    assert list(df["Plan"]) == ["Current", "Flat Fee"]
    assert df.loc[1, "PerLoan"] == pytest.approx(8205)


def test_volume_sensitivity_grows_linearly():
    df = volume_sensitivity(_split_bps_gross(), [0, 1, 2, 4])
    assert list(df["LoansPerMonth"]) == [0, 1, 2, 4]
    assert df.loc[0, "DeltaAnnual"] == 0
    assert df.loc[3, "DeltaAnnual"] == pytest.approx(4 * df.loc[1, "DeltaAnnual"])


def test_breakeven_split_matches_target():
    inp = _split_bps_gross()
    split = breakeven_split_pct(inp)
    assert split == pytest.approx(8205 / 9000 * 100)
    res = evaluate(inp.model_copy(update={"current_split_pct": split}))
    assert res.current.per_loan == pytest.approx(res.target.per_loan)


def test_breakeven_split_none_without_gross():
    assert breakeven_split_pct(_split_bps_gross(gross_bps=0)) is None


def test_breakeven_flat_fee():
    inp = _bps_dollar_gross()
    fee = breakeven_flat_fee(inp)
    assert fee == pytest.approx(8000 - 4550)
    res = evaluate(inp.model_copy(update={"target_flat_fee": fee}))
    assert res.delta_annual == pytest.approx(0, abs=1e-6)


def test_settings_default_flat_fee_matches_preset(monkeypatch):
    monkeypatch.delenv("TARGET_FLAT_FEE", raising=False)
    assert config.Settings().TARGET_FLAT_FEE == DEFAULT_TARGET_FLAT_FEE == 795


def test_target_flat_fee_default_follows_environment(monkeypatch):
    monkeypatch.setenv("TARGET_FLAT_FEE", "895")
    monkeypatch.setattr(config, "settings", config.Settings())
    res = evaluate(ComparisonInput(gross_mode="dollar", gross_dollar=9000, loans_per_month=1))
    assert res.target_flat_fee == config.settings.TARGET_FLAT_FEE == 895
    assert res.target.per_loan == pytest.approx(8105)
