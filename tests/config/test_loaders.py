import pytest
import yaml
from pydantic import ValidationError

from msrb_pension.config.loaders import (
    DEFAULT_TABLES_PATH,
    ConfigLoadError,
    get_statutory_tables,
    load_fixture_file,
    load_statutory_tables,
    load_yaml_config,
)
from msrb_pension.config.models import RetirementGroup

pytestmark = pytest.mark.config


def _raw_tables():
    with open(DEFAULT_TABLES_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


def test_packaged_tables_load():
    tables = load_statutory_tables()
    assert tables.version == "FY2025.2"
    assert tables.max_benefit_fraction == pytest.approx(0.80)
    assert tables.option_c.default == pytest.approx(0.9295)
    assert tables.projection_max_ages[RetirementGroup.GROUP_1] == 70


def test_tables_are_loaded_once():
    assert get_statutory_tables() is get_statutory_tables()


def test_factor_schedule_is_read_only(tables):
    schedule = tables.factor_schedule("default", RetirementGroup.GROUP_1)
    with pytest.raises(TypeError):
        schedule[60] = 0.05
    with pytest.raises(TypeError):
        tables.option_c_factors["55-55"] = 1.0


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigLoadError):
        load_statutory_tables(tmp_path / "nope.yaml")


def test_unparseable_yaml_raises(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text("version: [unclosed\n")
    with pytest.raises(ConfigLoadError):
        load_yaml_config(f)


def test_non_mapping_yaml_raises(tmp_path):
    f = tmp_path / "list.yaml"
    f.write_text(yaml.safe_dump([1, 2, 3]))
    with pytest.raises(ConfigLoadError):
        load_yaml_config(f)


def test_schema_rejects_unknown_keys(tmp_path):
    raw = _raw_tables()
    raw["surprise"] = True
    f = tmp_path / "tables.yaml"
    f.write_text(yaml.safe_dump(raw))
    with pytest.raises(ConfigLoadError, match="Schema validation failed"):
        load_statutory_tables(f)


def test_missing_group_schedule_rejected(tmp_path):
    raw = _raw_tables()
    del raw["benefit_factors"]["post_2012_under_30"][3]
    f = tmp_path / "tables.yaml"
    f.write_text(yaml.safe_dump(raw))
    with pytest.raises(ConfigLoadError, match="Group 3"):
        load_statutory_tables(f)


def test_implausible_factor_rejected(tmp_path):
    raw = _raw_tables()
    raw["benefit_factors"]["default"][1][60] = 2.0
    f = tmp_path / "tables.yaml"
    f.write_text(yaml.safe_dump(raw))
    with pytest.raises(ConfigLoadError):
        load_statutory_tables(f)


def test_bad_option_c_key_rejected(tmp_path):
    raw = _raw_tables()
    raw["option_c"]["factors"]["fifty-five"] = 0.9
    f = tmp_path / "tables.yaml"
    f.write_text(yaml.safe_dump(raw))
    with pytest.raises(ConfigLoadError):
        load_statutory_tables(f)


def test_packaged_fixture_file_loads():
    raw = load_fixture_file()
    assert len(raw["fixtures"]) >= 8


def test_cached_tables_cannot_be_mutated():
    tables = get_statutory_tables()
    with pytest.raises(ValidationError):
        tables.option_c.default = None
    with pytest.raises(ValidationError):
        tables.version = "tampered"
    with pytest.raises(TypeError):
        tables.option_c.factors["55-55"] = 0.5
    with pytest.raises(TypeError):
        tables.benefit_factors["default"][RetirementGroup.GROUP_2][55] = 0.05
    with pytest.raises(TypeError):
        tables.benefit_factors["default"] = {}
    with pytest.raises(TypeError):
        tables.eligibility.after_2012.minimum_ages[RetirementGroup.GROUP_1] = 40
    with pytest.raises(AttributeError):
        tables.option_b.append(tables.option_b[0])
    assert tables.option_c.default == pytest.approx(0.9295)
    assert tables.benefit_factors["default"][RetirementGroup.GROUP_2][55] == pytest.approx(0.020)


def test_frozen_tables_still_dump():
    dumped = get_statutory_tables().model_dump()
    assert dumped["option_c"]["factors"]["55-55"] == pytest.approx(0.9295)
    assert isinstance(dumped["benefit_factors"]["default"], dict)
