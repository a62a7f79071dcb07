"""Tests for the command line entry point."""

import json

import pytest

from adsreport import run_report
from adsreport.core.config import AppConfig


@pytest.fixture
def pipeline_client(monkeypatch, summer_sale_client):
    monkeypatch.setattr(run_report, "FacebookGraphClient", lambda http: summer_sale_client)
    return summer_sale_client


def test_excel_requires_output_file(pipeline_client):
    args = run_report.parse_args(["--account-id", "123", "--format", "excel"])

    assert run_report.run(args, AppConfig()) == 2
    assert pipeline_client.calls == []


def test_json_report_to_file(tmp_path, monkeypatch, pipeline_client):
    monkeypatch.setenv("FACEBOOK_ACCESS_TOKEN", "tok")
    output = tmp_path / "report.json"
    args = run_report.parse_args(
        ["--account-id", "123", "--from", "2025-04-10", "--to", "2025-04-10", "--format", "json", "--output", str(output)]
    )

    assert run_report.run(args, AppConfig()) == 0

    body = json.loads(output.read_text(encoding="utf-8"))
    assert body["ads"][0]["Purchase"] == "3"


def test_csv_report_to_stdout(capsys, monkeypatch, pipeline_client):
    monkeypatch.setenv("FACEBOOK_ACCESS_TOKEN", "tok")
    args = run_report.parse_args(["--account-id", "123", "--from", "2025-04-10", "--to", "2025-04-10"])

    assert run_report.run(args, AppConfig()) == 0

    out = capsys.readouterr().out
    assert out.startswith("Type,Date,ISO Week")


def test_main_reports_failures_as_exit_code(monkeypatch, pipeline_client):
    monkeypatch.delenv("REPORT_CONFIG_FILE", raising=False)
    args = ["--account-id", "123", "--from", "2025-04-30", "--to", "2025-04-01"]

    assert run_report.main(args) == 1
