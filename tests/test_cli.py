import pytest

from msrb_pension.cli import main


@pytest.mark.integration
def test_estimate_prints_all_options(tmp_path, capsys, isolated_logging):
    code = main([
        "--group", "2", "--age", "55", "--years", "31", "--salary", "95000",
        "--option", "C", "--beneficiary-age", "55", "--log-dir", str(tmp_path),
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "$58,900.00/yr" in out
    assert "$54,747.55/yr" in out
    assert "survivor $36,498.37/yr" in out


@pytest.mark.integration
def test_estimate_with_age_projection(tmp_path, capsys, isolated_logging):
    code = main([
        "--group", "1", "--age", "60", "--years", "35", "--salary", "95000",
        "--by-age", "--log-dir", str(tmp_path),
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "benefit percentage 70.00%" in out


@pytest.mark.integration
def test_estimate_reports_lookup_errors(tmp_path, capsys, isolated_logging):
    code = main([
        "--group", "1", "--age", "50", "--years", "25", "--salary", "95000", "--log-dir", str(tmp_path),
    ])
    assert code == 1
    assert "ERROR" in capsys.readouterr().err


@pytest.mark.integration
def test_estimate_rejects_bad_cola_rate(tmp_path, capsys, isolated_logging):
    code = main([
        "--group", "2", "--age", "55", "--years", "31", "--salary", "95000",
        "--cola-rate", "2", "--log-dir", str(tmp_path),
    ])
    assert code == 1
    assert "ERROR" in capsys.readouterr().err
