import pytest

from msrb_pension.engines.base_pension import compute_base_pension
from msrb_pension.errors import InvalidInputError

pytestmark = pytest.mark.engines


def test_uncapped_pension():
    base = compute_base_pension(95000, 31, 0.020)
    assert base.benefit_percentage == pytest.approx(62.0)
    assert base.uncapped_pension == pytest.approx(58900.0)
    assert base.base_pension == pytest.approx(58900.0)
    assert base.max_pension == pytest.approx(76000.0)
    assert not base.capped_at_80_percent


def test_capped_pension_keeps_uncapped_percentage():
    base = compute_base_pension(95000, 34, 0.024)
    # 34 x 2.4% = 81.6%: the dollars are capped, the percentage is not
    assert base.benefit_percentage == pytest.approx(81.6)
    assert base.uncapped_pension == pytest.approx(77520.0)
    assert base.base_pension == pytest.approx(76000.0)
    assert base.capped_at_80_percent


def test_exactly_eighty_percent_is_not_flagged_capped():
    base = compute_base_pension(100000, 32, 0.025)
    assert base.base_pension == pytest.approx(80000.0)
    assert not base.capped_at_80_percent


def test_zero_service_gives_zero_pension():
    base = compute_base_pension(95000, 0, 0.025)
    assert base.base_pension == 0.0
    assert base.benefit_percentage == 0.0


@pytest.mark.parametrize("salary, yos", [(0, 10), (-1, 10), (95000, -1)])
def test_invalid_inputs_raise(salary, yos):
    with pytest.raises(InvalidInputError):
        compute_base_pension(salary, yos, 0.02)
