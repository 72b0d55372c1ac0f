"""Integration tests for the command line and the YAML config executor."""

import json

import pytest
import yaml

from vizschema.cli import main
from vizschema.execution.config_executor import ConfigExecutor


def _write_json(path, payload) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


class TestCli:
    """Tests for vizschema.cli.main()."""

    @pytest.mark.cli
    def test_writes_schema_artifacts(self, tmp_path, query_result) -> None:
        """Schema inference writes JSON, YAML and a run summary."""
        results = _write_json(tmp_path / "results.json", query_result)
        out = tmp_path / "out"

        main(["--results", results, "--output-dir", str(out)])

        schema = json.loads((out / "schema.json").read_text(encoding="utf-8"))
        assert [f["name"] for f in schema] == ["id", "name", "active"]
        assert yaml.safe_load((out / "schema.yaml").read_text(encoding="utf-8")) == schema

        summary = json.loads((out / "run_summary.json").read_text(encoding="utf-8"))
        assert summary["strategy"] == "SAMPLING"
        assert summary["field_count"] == 3
        assert "row_count" not in summary
        assert not (out / "rows.json").exists()

    @pytest.mark.cli
    def test_bare_array_and_fields(self, tmp_path, wrapped_documents) -> None:
        """A bare document array is accepted and --fields writes rows."""
        results = _write_json(tmp_path / "results.json", wrapped_documents)
        out = tmp_path / "out"

        main([
            "--results", results,
            "--strategy", "first_row",
            "--fields", "id, website",
            "--output-dir", str(out),
        ])

        rows = json.loads((out / "rows.json").read_text(encoding="utf-8"))
        assert rows["rows"] == [
            {"values": [10, None]},
            {"values": [11, "https://texaswings.example"]},
        ]
        # FIRST_ROW never saw website, so it falls back to STRING
        assert rows["schema"][1]["dataType"] == "STRING"

    @pytest.mark.cli
    def test_clean_output_dir(self, tmp_path, query_result) -> None:
        """--clean-output-dir removes stale artifacts first."""
        results = _write_json(tmp_path / "results.json", query_result)
        out = tmp_path / "out"
        out.mkdir()
        (out / "stale.txt").write_text("old", encoding="utf-8")

        main(["--results", results, "--output-dir", str(out), "--clean-output-dir"])

        assert not (out / "stale.txt").exists()
        assert (out / "schema.json").exists()

    @pytest.mark.cli
    def test_missing_results_exits_nonzero(self, tmp_path) -> None:
        """Running without a query result fails with exit code 1."""
        with pytest.raises(SystemExit) as excinfo:
            main(["--output-dir", str(tmp_path / "out")])

        assert excinfo.value.code == 1

    @pytest.mark.cli
    def test_empty_results_exit_nonzero(self, tmp_path) -> None:
        """An empty result cannot produce a schema."""
        results = _write_json(tmp_path / "results.json", [])

        with pytest.raises(SystemExit) as excinfo:
            main(["--results", results, "--output-dir", str(tmp_path / "out")])

        assert excinfo.value.code == 1


class TestConfigExecutor:
    """Tests for ConfigExecutor."""

    @pytest.mark.cli
    def test_executes_yaml_config(self, tmp_path, query_result, infer_result) -> None:
        """Paths resolve relative to the config file."""
        _write_json(tmp_path / "results.json", query_result)
        _write_json(tmp_path / "infer.json", infer_result)
        config = tmp_path / "run.yaml"
        config.write_text(
            yaml.safe_dump({
                "source": {"results_file": "results.json", "infer_results_file": "infer.json"},
                "inference": {"strategy": "FLAVOR"},
                "fields": ["id", "url"],
                "connection": {"base_url": "db.local", "bucket": "hotels"},
                "output_dir": "outputs",
            }),
            encoding="utf-8",
        )

        result = ConfigExecutor(str(config)).execute()

        assert result["schema"]["strategy"] == "FLAVOR"
        assert result["schema"]["source"]["query_context"] == "hotels"
        assert result["data"]["schema"][1]["dataType"] == "URL"
        assert result["data"]["rows"] == [{"values": [1, None]}, {"values": [2, None]}]
        assert (tmp_path / "outputs" / "schema.yaml").exists()

    @pytest.mark.cli
    def test_missing_results_file_key(self, tmp_path) -> None:
        """source.results_file is required."""
        config = tmp_path / "run.yaml"
        config.write_text("source: {}\n", encoding="utf-8")

        with pytest.raises(ValueError, match="results_file"):
            ConfigExecutor(str(config)).execute()

    @pytest.mark.cli
    def test_missing_config_file(self, tmp_path) -> None:
        """A missing config path fails immediately."""
        with pytest.raises(FileNotFoundError):
            ConfigExecutor(str(tmp_path / "nope.yaml"))
