import pytest

from msrb_pension.config.models import (
    FACTOR_TABLE_DEFAULT,
    FACTOR_TABLE_POST_2012,
    RetirementGroup,
    ServiceEntryEra,
)
from msrb_pension.engines.benefit_factor import (
    get_benefit_factor,
    select_factor_table,
    tabulated_age_range,
)
from msrb_pension.errors import FactorLookupError

pytestmark = pytest.mark.engines


@pytest.mark.parametrize(
    "service_entry, yos, expected",
    [
        ("before_2012", 10, FACTOR_TABLE_DEFAULT),
        ("before_2012", 35, FACTOR_TABLE_DEFAULT),
        ("after_2012", 20, FACTOR_TABLE_POST_2012),
        ("after_2012", 29.99, FACTOR_TABLE_POST_2012),
        # 30 years or more puts a post-reform member back on the full schedule
        ("after_2012", 30, FACTOR_TABLE_DEFAULT),
        ("after_2012", 32, FACTOR_TABLE_DEFAULT),
    ],
)
def test_select_factor_table(tables, service_entry, yos, expected):
    assert select_factor_table(ServiceEntryEra(service_entry), yos, tables) == expected


@pytest.mark.parametrize(
    "group, service_entry, age, yos, expected",
    [
        (1, "before_2012", 60, 35, 0.020),
        (1, "before_2012", 62, 38, 0.022),
        (1, "before_2012", 67, 20, 0.025),
        (2, "before_2012", 55, 31, 0.020),
        (2, "before_2012", 59, 34, 0.024),
        (3, "before_2012", 50, 25, 0.025),
        (4, "before_2012", 52, 28, 0.022),
        (1, "after_2012", 60, 20, 0.0145),
        (1, "after_2012", 60, 30, 0.020),
        (4, "after_2012", 55, 25, 0.022),
    ],
)
def test_get_benefit_factor(tables, group, service_entry, age, yos, expected):
    factor = get_benefit_factor(RetirementGroup(group), ServiceEntryEra(service_entry), age, yos, tables)
    assert factor == pytest.approx(expected)


def test_group_accepts_label_strings(tables):
    assert get_benefit_factor("Group 2", "before_2012", 55, 31, tables) == pytest.approx(0.020)


@pytest.mark.parametrize(
    "group, age",
    [
        (1, 59),  # below Group 1 minimum
        (2, 54),
        (4, 49),
        (1, 68),  # above the oldest tabulated age
        (3, 80),
    ],
)
def test_age_outside_table_raises(tables, group, age):
    with pytest.raises(FactorLookupError):
        get_benefit_factor(RetirementGroup(group), ServiceEntryEra.BEFORE_2012, age, 25, tables)


def test_factor_lookup_error_is_a_lookup_error(tables):
    with pytest.raises(LookupError):
        get_benefit_factor(RetirementGroup.GROUP_1, ServiceEntryEra.BEFORE_2012, 40, 10, tables)


def test_tabulated_age_range(tables):
    assert tabulated_age_range(RetirementGroup.GROUP_1, FACTOR_TABLE_DEFAULT, tables) == (60, 67)
    assert tabulated_age_range(RetirementGroup.GROUP_4, FACTOR_TABLE_POST_2012, tables) == (50, 67)
