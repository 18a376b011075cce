import pytest

from msrb_pension import schema
from msrb_pension.config.models import RetirementGroup, RetirementOption, ServiceEntryEra
from msrb_pension.errors import InvalidInputError
from msrb_pension.projections.age_projection import project_by_retirement_age

pytestmark = pytest.mark.projections


def test_projection_stops_at_eighty_percent(tables):
    df = project_by_retirement_age(
        RetirementGroup.GROUP_2, 55, 31, 95000, ServiceEntryEra.BEFORE_2012, tables=tables
    )
    assert list(df.columns) == schema.AGE_PROJECTION_COLS
    assert df[schema.PROJ_AGE].tolist()[0] == 55
    # 31 yrs @ 2.0% = 62%, 32 @ 2.1% = 67.2%, 33 @ 2.2% = 72.6%, 34 @ 2.3% = 78.2%, 35 @ 2.4% = 84%
    assert df[schema.PROJ_AGE].tolist() == [55, 56, 57, 58, 59]
    last = df.iloc[-1]
    assert last[schema.PROJ_BENEFIT_PERCENTAGE] == pytest.approx(84.0)
    assert bool(last[schema.PROJ_CAPPED])
    assert last[schema.PROJ_ANNUAL_PENSION] == pytest.approx(76000.0)


def test_projection_stops_at_group_max_age(tables):
    df = project_by_retirement_age(
        RetirementGroup.GROUP_1, 60, 12, 60000, ServiceEntryEra.BEFORE_2012, tables=tables
    )
    # Group 1 projects through age 70 but factors are tabulated only to 67
    assert df[schema.PROJ_AGE].max() == 67
    assert df[schema.PROJ_AGE].tolist() == list(range(60, 68))


def test_projection_skips_ineligible_ages(tables):
    df = project_by_retirement_age(
        RetirementGroup.GROUP_1, 58, 8, 60000, ServiceEntryEra.AFTER_2012, tables=tables
    )
    # under 10 years until age 60, and no Group 1 factor before 60
    assert df[schema.PROJ_AGE].min() == 60


def test_projection_ages_beneficiary_with_member(tables):
    df = project_by_retirement_age(
        RetirementGroup.GROUP_2, 55, 25, 95000, ServiceEntryEra.BEFORE_2012,
        retirement_option=RetirementOption.C, beneficiary_age=53, tables=tables,
    )
    first, second = df.iloc[0], df.iloc[1]
    # 55-53 then 56-54
    assert first[schema.PROJ_ANNUAL_PENSION] == pytest.approx(95000 * 0.020 * 25 * 0.9295)
    assert second[schema.PROJ_ANNUAL_PENSION] == pytest.approx(95000 * 0.021 * 26 * 0.9253)
    assert first[schema.PROJ_SURVIVOR_ANNUAL] == pytest.approx(first[schema.PROJ_ANNUAL_PENSION] * 2 / 3)


def test_projection_beyond_max_age_is_empty(tables):
    df = project_by_retirement_age(
        RetirementGroup.GROUP_4, 66, 20, 70000, ServiceEntryEra.BEFORE_2012, tables=tables
    )
    assert df.empty
    assert list(df.columns) == schema.AGE_PROJECTION_COLS


def test_projection_option_c_without_beneficiary_raises(tables):
    with pytest.raises(InvalidInputError):
        project_by_retirement_age(
            RetirementGroup.GROUP_2, 55, 31, 95000, ServiceEntryEra.BEFORE_2012,
            retirement_option=RetirementOption.C, tables=tables,
        )
