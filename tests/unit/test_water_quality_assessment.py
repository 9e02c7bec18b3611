from datetime import datetime, timezone

import pytest

from aquafarm.domain.enums import Severity, WaterParameter, WaterQualityStatus
from aquafarm.domain.services.water_quality_assessment_service import WaterQualityAssessmentService
from aquafarm.domain.value_objects import Volume, WaterQuality
from aquafarm.infrastructure.catalog.fish_type_catalog import FishTypeCatalog

svc = WaterQualityAssessmentService()
tilapia = FishTypeCatalog.default().get_parameters("tilapia")
T0 = datetime(2025, 3, 1, 6, 0, tzinfo=timezone.utc)

def _water(temp=28.0, do=7.0, ph=7.5, tan=0.0, no2=0.0):
    return WaterQuality(temp, do, ph, tan, no2, measured_at=T0)

def test_optimal_reading_has_no_alerts():
    a = svc.assess(_water(), tilapia)
    assert a.status is WaterQualityStatus.OPTIMAL
    assert a.alerts == ()
    assert a.action_required is False
    assert a.assessed_at == T0

def test_low_oxygen_is_critical():
    a = svc.assess(_water(do=2.0), tilapia)
    assert a.status is WaterQualityStatus.CRITICAL
    assert a.action_required is True
    alert = a.alerts[0]
    assert alert.parameter is WaterParameter.DISSOLVED_OXYGEN
    assert alert.severity is Severity.CRITICAL
    assert a.parameters[WaterParameter.DISSOLVED_OXYGEN].status is WaterQualityStatus.CRITICAL

def test_ph_outside_optimal_band_is_warning():
    a = svc.assess(_water(ph=8.7), tilapia)
    assert a.status is WaterQualityStatus.WARNING
    assert [x.parameter for x in a.alerts] == [WaterParameter.PH]

def test_high_nitrite_is_warning():
    a = svc.assess(_water(no2=0.6), tilapia)
    assert a.parameters[WaterParameter.NITRITE].status is WaterQualityStatus.WARNING
    assert a.alerts[0].severity is Severity.WARNING

def test_alerts_follow_evaluation_order():
    a = svc.assess(_water(temp=36.0, do=2.0, no2=0.6), tilapia)
    assert [x.parameter for x in a.alerts] == [
        WaterParameter.DISSOLVED_OXYGEN, WaterParameter.NITRITE, WaterParameter.TEMPERATURE,
    ]

@pytest.mark.parametrize("water", [
    _water(),
    _water(do=5.5),
    _water(do=4.0, no2=0.3),
    _water(ph=6.8, temp=31.0),
    _water(temp=30.0, ph=8.5, tan=5.0),
    _water(temp=21.0, do=1.0, ph=9.5, no2=2.0),
])
def test_overall_status_is_worst_parameter(water):
    a = svc.assess(water, tilapia)
    worst = max((p.status for p in a.parameters.values()), key=lambda s: s.value)
    assert a.status is worst

@pytest.mark.parametrize("tan,ph,expected_m3", [
    (0.0, 7.5, 10.0),   # rotina
    (5.0, 7.0, 20.0),   # NH3 ~ 0.039
    (10.0, 7.0, 30.0),  # NH3 ~ 0.079
    (5.0, 8.5, 50.0),   # NH3 ~ 1.0
])
def test_water_exchange_tiers(tan, ph, expected_m3):
    water = _water(temp=30.0, ph=ph, tan=tan)
    volume = svc.calculate_water_exchange_rate(water, Volume.from_cubic_meters(100.0))
    assert volume.to_cubic_meters() == pytest.approx(expected_m3)

def test_assessment_to_dict():
    d = svc.assess(_water(do=2.0), tilapia).to_dict()
    assert d["status"] == "CRITICAL"
    assert d["alerts"][0]["parameter"] == "Dissolved Oxygen"
    assert d["alerts"][0]["severity"] == "CRITICAL"
    assert d["parameters"]["pH"]["status"] == "OPTIMAL"
    assert d["assessed_at"] == T0.isoformat()

S = WaterQualityStatus

@pytest.mark.parametrize("do,expected", [
    (2.9, S.CRITICAL), (3.0, S.WARNING), (4.9, S.WARNING),
    (5.0, S.ACCEPTABLE), (5.9, S.ACCEPTABLE), (6.0, S.OPTIMAL),
])
def test_dissolved_oxygen_ladder(do, expected):
    a = svc.assess(_water(do=do), tilapia)
    assert a.parameters[WaterParameter.DISSOLVED_OXYGEN].status is expected

@pytest.mark.parametrize("ph,expected", [
    (6.4, S.CRITICAL), (6.8, S.WARNING), (7.0, S.OPTIMAL),
    (8.5, S.OPTIMAL), (8.7, S.WARNING), (9.0, S.WARNING), (9.2, S.CRITICAL),
])
def test_ph_ladder(ph, expected):
    assert svc.assess(_water(ph=ph), tilapia).parameters[WaterParameter.PH].status is expected

@pytest.mark.parametrize("ph,action", [
    (6.0, "Aplicar calcário para elevar o pH"),
    (9.5, "Troca parcial de água para reduzir o pH"),
])
def test_ph_critical_action_depends_on_side(ph, action):
    alert = svc.assess(_water(ph=ph), tilapia).alerts[0]
    assert alert.parameter is WaterParameter.PH
    assert alert.severity is Severity.CRITICAL
    assert alert.action == action

@pytest.mark.parametrize("nh3,expected", [
    (0.2, S.CRITICAL), (0.1, S.WARNING), (0.05, S.WARNING),
    (0.02, S.ACCEPTABLE), (0.015, S.ACCEPTABLE), (0.01, S.OPTIMAL), (0.0, S.OPTIMAL),
])
def test_ammonia_ladder(nh3, expected):
    assert svc._assess_ammonia(nh3, tilapia, []) is expected

def test_ammonia_warning_from_reading():
    # 30 °C, pH 7.0, TAN 5 => NH3 ~ 0.039 (entre nh3_safe e nh3_critical)
    a = svc.assess(_water(temp=30.0, ph=7.0, tan=5.0), tilapia)
    assert a.parameters[WaterParameter.AMMONIA].status is S.WARNING
    assert [x.parameter for x in a.alerts] == [WaterParameter.AMMONIA]
    assert a.alerts[0].severity is Severity.WARNING

@pytest.mark.parametrize("no2,expected", [
    (0.0, S.OPTIMAL), (0.25, S.OPTIMAL), (0.3, S.ACCEPTABLE), (0.5, S.ACCEPTABLE), (0.6, S.WARNING),
])
def test_nitrite_ladder(no2, expected):
    assert svc.assess(_water(no2=no2), tilapia).parameters[WaterParameter.NITRITE].status is expected

@pytest.mark.parametrize("temp,expected", [
    (19.0, S.CRITICAL), (23.0, S.WARNING), (25.0, S.ACCEPTABLE), (26.0, S.OPTIMAL),
    (30.0, S.OPTIMAL), (31.0, S.ACCEPTABLE), (33.0, S.WARNING), (36.0, S.CRITICAL),
])
def test_temperature_ladder(temp, expected):
    a = svc.assess(_water(temp=temp), tilapia)
    assert a.parameters[WaterParameter.TEMPERATURE].status is expected
