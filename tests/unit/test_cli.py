"""
Unit tests for CLI argument handling.
"""

import pytest

from retail_pipeline.cli.report_cli import build_parser, main


class TestParser:

    def test_report_arguments(self):
        args = build_parser().parse_args([
            "report", "--input", "data.csv", "--metrics", "total_revenue", "top_customers", "--materialize",
        ])

        assert args.command == "report"
        assert args.input == "data.csv"
        assert args.metrics == ["total_revenue", "top_customers"]
        assert args.materialize is True
        assert args.from_db is False

    def test_unknown_metric_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["report", "--input", "data.csv", "--metrics", "median_basket"])

    def test_profile_requires_input(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["profile"])

    def test_no_command_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    def test_report_without_source_exits(self, monkeypatch):
        for name in ("RETAIL_DATE_FORMAT", "LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(SystemExit) as exc_info:
            main(["report"])
        assert exc_info.value.code == 1

    def test_missing_input_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["profile", "--input", str(tmp_path / "absent.csv")])
        assert exc_info.value.code == 1

    def test_sample_size_must_be_positive(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["profile", "--input", "data.csv", "--sample-size", "-1"])
        assert exc_info.value.code == 2


@pytest.fixture
def no_db_password(monkeypatch):
    for name in ("DB_PASSWORD", "RETAIL_DATE_FORMAT", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


class TestCommandErrors:

    def test_report_from_db_without_password_exits(self, no_db_password, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["report", "--from-db"])

        assert exc_info.value.code == 1
        assert "Database password must be provided" in capsys.readouterr().err

    def test_load_without_password_exits(self, no_db_password, sample_csv_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["load", "--input", sample_csv_path])

        assert exc_info.value.code == 1
        assert "Load failed" in capsys.readouterr().err

    def test_report_with_incomplete_rules_exits(self, no_db_password, tmp_path, sample_csv_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  quantity:\n    - type: range\n      params:\n        min_exclusive: 0\n")
        config = tmp_path / "pipeline.yaml"
        config.write_text("pipeline:\n  rules_path: rules.yaml\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config), "report", "--input", sample_csv_path])

        assert exc_info.value.code == 1
