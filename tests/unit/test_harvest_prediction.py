import math
from datetime import datetime, timedelta, timezone

import pytest

from aquafarm.domain.errors import PreconditionError
from aquafarm.domain.services.harvest_prediction_service import HarvestPredictionService
from aquafarm.domain.value_objects import BatchStatistics, Weight

svc = HarvestPredictionService()
g = Weight.from_grams
T0 = datetime(2025, 6, 1, tzinfo=timezone.utc)

@pytest.mark.parametrize("current,target,sgr", [
    (10.0, 500.0, 2.5),
    (50.0, 800.0, 1.2),
    (100.0, 101.0, 3.0),
    (300.0, 700.0, 0.35),
])
def test_days_to_target_round_trip(current, target, sgr):
    days = svc.calculate_days_to_target(g(current), g(target), sgr)
    predicted = svc.predict_future_weight(g(current), sgr, days).to_grams()
    assert predicted >= target * (1 - 1e-9)
    assert predicted < target * math.exp(sgr / 100.0)

def test_target_already_reached_is_zero_days():
    assert svc.calculate_days_to_target(g(600.0), g(500.0), 1.0) == 0

@pytest.mark.parametrize("sgr", [0.0, -1.0])
def test_days_to_target_requires_positive_sgr(sgr):
    with pytest.raises(PreconditionError):
        svc.calculate_days_to_target(g(10.0), g(500.0), sgr)

def test_predict_harvest():
    stats = BatchStatistics(1000, g(300.0))
    p = svc.predict_harvest(stats, g(500.0), 1.0, 90.0, current_date=T0)
    assert p.days_to_harvest == 52  # ln(5/3) / 0.01 = 51.08
    assert p.harvest_date == T0 + timedelta(days=52)
    assert p.expected_final_count == 900
    assert p.final_production.to_kilograms() == pytest.approx(450.0)
    assert svc.predict_harvest_date(g(300.0), g(500.0), 1.0, current_date=T0) == p.harvest_date

def test_harvest_economics():
    stats = BatchStatistics(1000, g(300.0))
    p = svc.predict_harvest(stats, g(500.0), 1.0, 100.0, current_date=T0)
    e = svc.calculate_harvest_economics(p, Weight.from_kilograms(20.0), 1.0, 3.0, other_costs=100.0)
    assert e.remaining_feed.to_kilograms() == pytest.approx(1040.0)
    assert e.total_remaining_costs == pytest.approx(1140.0)
    assert e.projected_revenue == pytest.approx(1500.0)
    assert e.gross_profit == pytest.approx(360.0)
    assert e.profit_margin == pytest.approx(24.0)
    assert e.break_even_production == pytest.approx(380.0)

def test_economics_guards():
    empty = svc.predict_harvest(BatchStatistics(0, g(300.0)), g(500.0), 1.0, 100.0, current_date=T0)
    e = svc.calculate_harvest_economics(empty, Weight.from_kilograms(1.0), 1.0, 3.0)
    assert e.projected_revenue == 0.0
    assert e.profit_margin == 0.0
    with pytest.raises(PreconditionError):
        svc.calculate_harvest_economics(empty, Weight.from_kilograms(1.0), 1.0, 0.0)

def _optimal(daily_feed_kg):
    return svc.determine_optimal_harvest_timing(
        BatchStatistics(1000, g(300.0)),
        [g(500.0), g(700.0)],
        [3.0, 3.2],
        sgr=1.0,
        feed_price_per_kg=1.0,
        average_daily_feed=Weight.from_kilograms(daily_feed_kg),
        current_date=T0,
    )

def test_optimum_picks_highest_profit():
    # 500 g: 52 dias, 1500 - 1040 = 460 | 700 g: 85 dias, 2240 - 1700 = 540
    best = _optimal(20.0)
    assert best.optimal_weight == g(700.0)
    assert best.optimal_date == T0 + timedelta(days=85)
    assert best.economics.gross_profit == pytest.approx(540.0)
    assert best.reason.startswith("Maximiza o lucro em 700 g")

def test_optimum_is_not_always_heaviest_or_best_price():
    # 500 g: 1500 - 1560 = -60 | 700 g: 2240 - 2550 = -310
    best = _optimal(30.0)
    assert best.optimal_weight == g(500.0)
    assert best.economics.gross_profit == pytest.approx(-60.0)

def test_optimum_tie_keeps_first_candidate():
    best = svc.determine_optimal_harvest_timing(
        BatchStatistics(1000, g(300.0)), [g(500.0), g(500.0)], [3.0, 3.0],
        1.0, 1.0, Weight.from_kilograms(20.0), current_date=T0,
    )
    assert best.optimal_weight == g(500.0)
    assert best.economics.gross_profit == pytest.approx(460.0)

def test_optimum_rejects_invalid_candidates():
    stats = BatchStatistics(1000, g(300.0))
    with pytest.raises(PreconditionError):
        svc.determine_optimal_harvest_timing(stats, [], [], 1.0, 1.0, Weight.zero())
    with pytest.raises(PreconditionError):
        svc.determine_optimal_harvest_timing(stats, [g(500.0)], [3.0, 3.2], 1.0, 1.0, Weight.zero())

def test_economics_to_dict_rounds_values():
    stats = BatchStatistics(1000, g(300.0))
    p = svc.predict_harvest(stats, g(500.0), 1.0, 100.0, current_date=T0)
    d = svc.calculate_harvest_economics(p, Weight.from_kilograms(20.0), 1.0, 3.0).to_dict()
    assert d["remaining_feed_kg"] == 1040.0
    assert d["gross_profit"] == 460.0
    assert d["profit_margin"] == 30.67
