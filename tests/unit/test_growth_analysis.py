import math

import pytest

from aquafarm.domain.entities.growth import GrowthMetrics
from aquafarm.domain.enums import PerformanceRating
from aquafarm.domain.errors import PreconditionError
from aquafarm.domain.services.growth_analysis_service import GrowthAnalysisService
from aquafarm.domain.value_objects import Weight
from aquafarm.infrastructure.catalog.fish_type_catalog import FishTypeCatalog

svc = GrowthAnalysisService()
tilapia = FishTypeCatalog.default().get_parameters("tilapia")
g = Weight.from_grams
kg = Weight.from_kilograms

def test_sgr_and_adg():
    assert svc.calculate_sgr(g(10.0), g(20.0), 10) == pytest.approx(math.log(2) * 10)
    assert svc.calculate_adg(g(10.0), g(20.0), 10) == pytest.approx(1.0)

@pytest.mark.parametrize("days", [0, -3])
def test_sgr_requires_positive_days(days):
    with pytest.raises(PreconditionError):
        svc.calculate_sgr(g(10.0), g(20.0), days)
    with pytest.raises(PreconditionError):
        svc.calculate_adg(g(10.0), g(20.0), days)

def test_sgr_requires_positive_weights():
    with pytest.raises(PreconditionError):
        svc.calculate_sgr(Weight.zero(), g(20.0), 10)

def test_weight_gain_cannot_be_negative():
    assert svc.calculate_weight_gain(g(10.0), g(25.0)) == g(15.0)
    with pytest.raises(PreconditionError):
        svc.calculate_weight_gain(g(25.0), g(10.0))

def test_ratios():
    assert svc.calculate_fcr(kg(1.5), kg(1.0)) == pytest.approx(1.5)
    assert svc.calculate_per(kg(1.0), kg(0.5)) == pytest.approx(2.0)
    assert svc.calculate_feed_efficiency(kg(1.0), kg(1.5)) == pytest.approx(66.6667, rel=1e-4)
    assert svc.calculate_condition_factor(g(100.0), 10.0) == pytest.approx(10.0)

def test_ratios_reject_non_positive_denominators():
    with pytest.raises(PreconditionError):
        svc.calculate_fcr(kg(1.0), Weight.zero())
    with pytest.raises(PreconditionError):
        svc.calculate_per(kg(1.0), Weight.zero())
    with pytest.raises(PreconditionError):
        svc.calculate_feed_efficiency(kg(1.0), Weight.zero())
    with pytest.raises(PreconditionError):
        svc.calculate_condition_factor(g(100.0), 0.0)

def test_growth_metrics_consolidated():
    m = svc.calculate_growth_metrics(g(10.0), g(100.0), 60, g(135.0), 30.0)
    assert m.weight_gain.to_grams() == pytest.approx(90.0)
    assert m.sgr == pytest.approx(math.log(10) / 60 * 100)
    assert m.adg == pytest.approx(1.5)
    assert m.fcr == pytest.approx(1.5)
    assert m.per == pytest.approx(0.090 / (0.135 * 0.30))
    assert m.feed_efficiency == pytest.approx(90.0 / 135.0 * 100)
    assert m.days_in_culture == 60

def test_evaluate_on_target():
    m = svc.calculate_growth_metrics(g(10.0), g(100.0), 60, g(135.0), 30.0)
    perf = svc.evaluate_performance(m, tilapia)
    assert perf.fcr_rating is PerformanceRating.GOOD
    assert perf.sgr_rating is PerformanceRating.EXCELLENT
    assert perf.overall_rating is PerformanceRating.EXCELLENT  # média 3.5
    assert perf.recommendations == ("Desempenho dentro da meta - manter o protocolo atual",)

def test_evaluate_poor_lists_corrective_actions():
    m = GrowthMetrics(weight_gain=g(5.0), sgr=0.5, adg=0.1, fcr=3.0, per=0.5,
                      feed_efficiency=33.0, days_in_culture=50)
    perf = svc.evaluate_performance(m, tilapia)
    assert perf.fcr_rating is PerformanceRating.POOR
    assert perf.sgr_rating is PerformanceRating.POOR
    assert perf.overall_rating is PerformanceRating.POOR
    assert "Considerar reduzir a taxa de alimentação em 10-15%" in perf.recommendations
    assert "Investigar possíveis inibidores de crescimento" in perf.recommendations
    assert len(perf.recommendations) == 8

@pytest.mark.parametrize("fcr,expected", [
    (1.0, PerformanceRating.EXCELLENT),
    (1.8, PerformanceRating.GOOD),
    (2.1, PerformanceRating.ACCEPTABLE),
    (2.2, PerformanceRating.POOR),
])
def test_fcr_rating_bands(fcr, expected):
    assert svc._rate_fcr(fcr, tilapia.fcr_min, tilapia.fcr_max) is expected
