import json
from uuid import uuid4

from roi_simulator import cli
from roi_simulator.services.roi import ScenarioInputs
from roi_simulator.services.scenarios import create_scenario


def test_simulate_command_prints_results(capsys):
    code = cli.main(
        [
            "simulate",
            "--monthly-invoice-volume", "2000",
            "--num-ap-staff", "3",
            "--avg-hours-per-invoice", "0.17",
            "--hourly-wage", "30",
            "--error-rate-manual", "0.5",
            "--error-cost", "100",
            "--one-time-implementation-cost", "50000",
        ]
    )
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["inputs"]["time_horizon_months"] == 36
    assert payload["results"]["monthly_savings"] == 34100
    assert payload["results"]["roi_percentage"] == 2355.2


def test_simulate_command_defaults(capsys):
    assert cli.main(["simulate"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["results"]["monthly_savings"] == 1.1
    assert payload["results"]["payback_months"] is None


def test_report_command_writes_pdf(db_session, tmp_path):
    scenario = create_scenario(db_session, scenario_name="cli", inputs=ScenarioInputs())
    out = tmp_path / "report.pdf"
    code = cli.main(
        ["report", "--scenario-id", scenario.id, "--email", "ap@example.com", "-o", str(out)]
    )
    assert code == 0
    assert out.read_bytes().startswith(b"%PDF")


def test_report_command_unknown_scenario(tmp_path):
    out = tmp_path / "missing.pdf"
    code = cli.main(
        ["report", "--scenario-id", str(uuid4()), "--email", "ap@example.com", "-o", str(out)]
    )
    assert code == 1
    assert not out.exists()
