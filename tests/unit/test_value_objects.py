import math
from datetime import datetime, timezone

import pytest

from aquafarm.domain.errors import DomainError, ValidationError
from aquafarm.domain.value_objects import (
    BatchStatistics, FishBatchId, TankId, Volume, WaterQuality, Weight
)

@pytest.mark.parametrize("grams", [0.0, 0.5, 12.34, 1000.0, 987654.321])
def test_weight_from_grams_round_trip(grams):
    assert Weight.from_grams(grams).to_grams() == grams

def test_weight_equality_and_units():
    a, b = Weight.from_grams(1500.0), Weight.from_kilograms(1.5)
    assert a == a
    assert a == b and b == a
    assert a.to_kilograms() == 1.5
    assert (a + b).to_grams() == 3000.0
    assert Weight.zero().to_grams() == 0.0

def test_weight_negative_rejected():
    with pytest.raises(ValidationError):
        Weight.from_grams(-0.1)

def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)
    assert issubclass(ValidationError, DomainError)

def test_volume_units_and_validation():
    assert Volume.from_liters(1500.0).to_cubic_meters() == 1.5
    assert Volume.from_cubic_meters(2.0).to_liters() == 2000.0
    with pytest.raises(ValidationError):
        Volume.from_cubic_meters(0.0)

def test_identifiers_reject_blank():
    assert str(TankId("T1")) == "T1"
    with pytest.raises(ValidationError):
        FishBatchId("   ")

def test_water_quality_hard_limits():
    with pytest.raises(ValidationError):
        WaterQuality(28.0, 6.0, 15.0, 0.1, 0.1)
    with pytest.raises(ValidationError):
        WaterQuality(55.0, 6.0, 7.5, 0.1, 0.1)
    with pytest.raises(ValidationError):
        WaterQuality(28.0, -1.0, 7.5, 0.1, 0.1)

def test_water_quality_naive_timestamp_becomes_utc():
    wq = WaterQuality(28.0, 6.0, 7.5, 0.1, 0.1, datetime(2025, 3, 1, 8, 0))
    assert wq.measured_at.tzinfo == timezone.utc
    assert wq.measured_at.hour == 8

def test_toxic_ammonia_zero_without_tan():
    assert WaterQuality(28.0, 6.0, 7.5, 0.0, 0.0).calculate_toxic_ammonia() == 0.0

def test_toxic_ammonia_increases_with_temperature():
    values = [
        WaterQuality(float(t), 6.0, 7.5, 1.0, 0.0).calculate_toxic_ammonia()
        for t in range(0, 51, 2)
    ]
    assert all(b > a for a, b in zip(values, values[1:]))

def test_batch_statistics_mortality_and_biomass():
    stats = BatchStatistics(1000, Weight.from_grams(50.0))
    assert stats.total_biomass().to_kilograms() == 50.0

    after = stats.record_mortality(100, initial_count=1000)
    assert after.fish_count == 900
    assert after.survival_rate == 90.0
    assert stats.fish_count == 1000  # instância original intacta

    with pytest.raises(ValidationError):
        stats.record_mortality(10, initial_count=0)

@pytest.mark.parametrize("grams", [math.nan, math.inf])
def test_weight_rejects_non_finite(grams):
    with pytest.raises(ValidationError):
        Weight.from_grams(grams)

@pytest.mark.parametrize("m3", [math.nan, math.inf])
def test_volume_rejects_non_finite(m3):
    with pytest.raises(ValidationError):
        Volume.from_cubic_meters(m3)

@pytest.mark.parametrize("reading", [
    dict(temperature=28.0, dissolved_oxygen=math.nan, ph=7.5, total_ammonia=0.1, nitrite=0.1),
    dict(temperature=28.0, dissolved_oxygen=6.0, ph=7.5, total_ammonia=math.nan, nitrite=0.1),
    dict(temperature=28.0, dissolved_oxygen=6.0, ph=7.5, total_ammonia=0.1, nitrite=math.nan),
    dict(temperature=math.nan, dissolved_oxygen=6.0, ph=7.5, total_ammonia=0.1, nitrite=0.1),
    dict(temperature=28.0, dissolved_oxygen=6.0, ph=math.nan, total_ammonia=0.1, nitrite=0.1),
    dict(temperature=28.0, dissolved_oxygen=math.inf, ph=7.5, total_ammonia=0.1, nitrite=0.1),
])
def test_water_quality_rejects_non_finite(reading):
    with pytest.raises(ValidationError):
        WaterQuality(**reading)
