import math
from datetime import datetime, timedelta, timezone

import pytest

from aquafarm.domain.entities.fish_batch import FishBatch
from aquafarm.domain.errors import PreconditionError
from aquafarm.domain.value_objects import Weight
from aquafarm.infrastructure.ai.growth_trend_model import fit_batch_trend, fit_growth_trend, growth_points

def test_fit_recovers_exponential_curve():
    days = [0, 10, 20, 30, 45]
    weights = [10.0 * math.exp(0.02 * d) for d in days]
    trend = fit_growth_trend(days, weights)
    assert trend.sgr == pytest.approx(2.0, rel=1e-6)
    assert trend.initial_weight_g == pytest.approx(10.0, rel=1e-6)
    assert trend.r2 == pytest.approx(1.0)
    assert trend.n_points == 5
    assert trend.project_weight(60).to_grams() == pytest.approx(10.0 * math.exp(1.2), rel=1e-6)

def test_noisy_fit_has_lower_r2():
    trend = fit_growth_trend([0, 10, 20, 30], [10.0, 14.0, 13.0, 25.0])
    assert 0.0 < trend.r2 < 1.0
    assert trend.sgr > 0

@pytest.mark.parametrize("days,weights", [
    ([5], [10.0]),
    ([5, 5], [10.0, 12.0]),
    ([0, 10], [10.0, 0.0]),
    ([0, 10, 20], [10.0, 12.0]),
])
def test_fit_rejects_bad_samples(days, weights):
    with pytest.raises(PreconditionError):
        fit_growth_trend(days, weights)

def test_fit_batch_trend_uses_stocking_point():
    t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
    b = FishBatch.create("B1", "tilapia", 500, Weight.from_grams(10.0), stocked_date=t0)
    for d in (15, 30):
        b.record_growth(Weight.from_grams(10.0 * math.exp(0.03 * d)), t0 + timedelta(days=d))

    days, weights = growth_points(b)
    assert days == [0.0, 15.0, 30.0]
    assert weights[0] == 10.0
    assert fit_batch_trend(b).sgr == pytest.approx(3.0, rel=1e-6)
