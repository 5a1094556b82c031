import json

from click.testing import CliRunner

from fintrack.main import cli, parse_amount


def test_parse_amount_suffixes():
    assert parse_amount("5l") == 500000
    assert parse_amount("1.5cr") == 15000000
    assert parse_amount("20k") == 20000
    assert parse_amount(" 1,000 ") == "1000"


def test_salary_command():
    result = CliRunner().invoke(cli, ["salary", "--salary", "1l"])
    assert result.exit_code == 0
    assert "₹40,000" in result.output
    assert "Credit/EMI" in result.output


def test_emi_export_json(tmp_path):
    out = tmp_path / "schedule.json"
    result = CliRunner().invoke(cli, ["emi", "-p", "10l", "-r", "8.5", "-t", "20", "--output", str(out)])
    assert result.exit_code == 0
    assert "Schedule exported to" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["schedule"]) == 240
    assert data["summary"]["months"] == 240
    assert round(data["summary"]["installment"]) == 8678


def test_emi_yearly_view():
    result = CliRunner().invoke(cli, ["emi", "-p", "500000", "-r", "9", "-t", "2", "--yearly"])
    assert result.exit_code == 0
    assert "Year\tPrincipal" in result.output


def test_emi_rejects_rate():
    result = CliRunner().invoke(cli, ["emi", "-p", "100000", "-r", "45", "-t", "5"])
    assert result.exit_code == 2
    assert "Please enter a valid interest rate between 0 and 30" in result.output


def test_emi_rejects_unknown_export_format(tmp_path):
    result = CliRunner().invoke(
        cli, ["emi", "-p", "100000", "-r", "9", "-t", "5", "--output", str(tmp_path / "s.xml")]
    )
    assert result.exit_code == 2


def test_sip_command():
    result = CliRunner().invoke(cli, ["sip", "-a", "5000", "-y", "5", "--profile", "moderate"])
    assert result.exit_code == 0
    assert "Large Cap Fund" in result.output
    assert "₹4,12,432" in result.output


def test_invest_minimum():
    result = CliRunner().invoke(cli, ["invest", "-a", "500"])
    assert result.exit_code == 2
    assert "Minimum investment amount" in result.output


def test_invest_command():
    result = CliRunner().invoke(cli, ["invest", "-a", "1l", "--profile", "moderate"])
    assert result.exit_code == 0
    assert "Mutual Funds" in result.output
    assert "₹1,61,051" in result.output


def test_goals_session():
    result = CliRunner().invoke(
        cli,
        [
            "goals",
            "--today", "2026-01-01",
            "--goal", "Vacation:50000:2026-06-01:High:Travel",
            "--goal", "Laptop:80000:2026-01-05:Medium:Gadgets:work machine",
            "--contribute", "1:26000",
            "--contribute", "1:26000",
        ],
    )
    assert result.exit_code == 0
    assert "You're halfway to your goal: Vacation" in result.output
    assert "Congratulations! You've achieved your goal: Vacation" in result.output
    assert 'Alert: "Laptop" is due in 4 days and is only 0.0% complete!' in result.output
    assert "Notes: work machine" in result.output


def test_goals_rejects_bad_contribution_index():
    result = CliRunner().invoke(
        cli, ["goals", "--goal", "Car:100000:2027-01-01:Low:Vehicle", "--contribute", "3:100"]
    )
    assert result.exit_code == 2
    assert "No goal number 3" in result.output
