import pytest

from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.errors import FishTypeNotFoundError, ValidationError
from aquafarm.infrastructure.catalog.fish_type_catalog import NILE_TILAPIA, FishTypeCatalog

def test_default_catalog_has_tilapia():
    catalog = FishTypeCatalog.default()
    params = catalog.get_parameters("tilapia")
    assert "tilapia" in catalog and len(catalog) == 1
    assert params.do_min == 3.0 and params.temp_optimal == 28.0
    assert len(params.feeding_rate_matrix.weight_ranges) == 6
    assert params.meal_frequency_rules[-1].max_weight is None

def test_unknown_fish_type():
    catalog = FishTypeCatalog.default()
    assert catalog.get("pirarucu") is None
    with pytest.raises(FishTypeNotFoundError):
        catalog.get_parameters("pirarucu")
    with pytest.raises(LookupError):
        catalog.get_parameters("pirarucu")

def test_document_missing_key_is_rejected():
    doc = dict(NILE_TILAPIA)
    del doc["nh3Critical"]
    with pytest.raises(ValidationError):
        FishTypeParameters.from_dict(doc)

def test_matrix_shape_is_validated():
    doc = dict(NILE_TILAPIA)
    doc["feedingRateMatrix"] = dict(NILE_TILAPIA["feedingRateMatrix"], rates=[[1.0, 2.0]])
    with pytest.raises(ValidationError):
        FishTypeParameters.from_dict(doc)
