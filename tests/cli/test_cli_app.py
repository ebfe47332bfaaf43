"""End-to-end tests for the ``sqlsamples`` CLI against a SQLite file."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from sqlsamples.cli.app import app

runner = CliRunner()


def _invoke(*args: str):
    return runner.invoke(app, list(args))


def _json(result) -> dict:
    return json.loads(result.stdout)


class TestVersion:
    def test_version(self):
        result = _invoke("--version")
        assert result.exit_code == 0
        assert result.stdout.startswith("sqlsamples ")

    def test_no_args_shows_help(self):
        result = _invoke()
        assert "setup" in result.output
        assert "examples" in result.output


class TestLifecycle:
    def test_setup_seed_check_cleanup(self, cli_db):
        setup = _invoke("setup", "-d", cli_db, "--json")
        assert setup.exit_code == 0, setup.output
        assert "employees" in _json(setup)["data"]["tables"]

        seed = _invoke("seed", "-d", cli_db, "--json")
        assert seed.exit_code == 0, seed.output
        assert _json(seed)["data"]["counts"]["orders"] == 12

        check = _invoke("check", "-d", cli_db, "--json")
        assert check.exit_code == 0, check.output
        statuses = {c["name"]: c["status"] for c in _json(check)["data"]["checks"]}
        assert set(statuses.values()) == {"PASS"}

        cleanup = _invoke("cleanup", "-d", cli_db, "--json")
        assert cleanup.exit_code == 0, cleanup.output
        assert _json(cleanup)["data"]["remaining"] == 0

        after = _invoke("check", "--after-cleanup", "-d", cli_db, "--json")
        assert after.exit_code == 0, after.output

    def test_check_before_cleanup_fails(self, cli_db):
        _invoke("setup", "-d", cli_db)
        result = _invoke("check", "--after-cleanup", "-d", cli_db)
        assert result.exit_code == 1

    def test_setup_dry_run(self, cli_db):
        result = _invoke("setup", "-g", "temporal", "--dry-run", "-d", cli_db, "--json")
        assert result.exit_code == 0, result.output
        data = _json(result)["data"]
        assert data["dry_run"] is True
        assert data["groups"] == ["temporal"]

        catalog = _invoke("catalog", "-d", cli_db, "--json")
        assert _json(catalog)["data"]["tables"] == []

    def test_seed_without_setup_fails(self, cli_db):
        result = _invoke("seed", "-d", cli_db)
        assert result.exit_code == 1

    def test_table_output(self, cli_db):
        _invoke("setup", "-d", cli_db)
        result = _invoke("seed", "-d", cli_db)
        assert result.exit_code == 0, result.output
        assert "Seeded 151 rows" in result.stdout


class TestExamplesCommands:
    def test_list(self, cli_db):
        result = _invoke("examples", "list", "--topic", "joins", "-d", cli_db, "--json")
        assert result.exit_code == 0, result.output
        keys = [e["key"] for e in _json(result)["data"]]
        assert "joins.anti_join" in keys

    def test_show_needs_no_database(self):
        result = _invoke("examples", "show", "recursive.number_series", "--dialect", "db2")
        assert result.exit_code == 0, result.output
        assert "FROM SYSIBM.SYSDUMMY1" in result.stdout

    def test_show_unknown_example(self):
        result = _invoke("examples", "show", "recursive.nope")
        assert result.exit_code == 1

    def test_run(self, cli_db):
        _invoke("setup", "-d", cli_db)
        _invoke("seed", "-d", cli_db)
        result = _invoke("examples", "run", "recursive.fibonacci", "-d", cli_db, "--json")
        assert result.exit_code == 0, result.output
        data = _json(result)["data"]
        assert data["row_count"] == 20
        assert data["rows"][-1] == [20, 4181]

    def test_run_prepared_topic(self, cli_db):
        _invoke("setup", "-d", cli_db)
        result = _invoke("examples", "run", "semistructured.json_filter", "-d", cli_db, "--json")
        assert result.exit_code == 0, result.output
        assert _json(result)["data"]["row_count"] == 1

    def test_run_without_prepare_fails(self, cli_db):
        _invoke("setup", "-d", cli_db)
        result = _invoke("examples", "run", "temporal.as_of", "--no-prepare", "-d", cli_db)
        assert result.exit_code == 1

    def test_topic(self, cli_db):
        _invoke("setup", "-d", cli_db)
        _invoke("seed", "-d", cli_db)
        result = _invoke("topic", "windows", "-d", cli_db, "--json")
        assert result.exit_code == 0, result.output
        assert _json(result)["data"]["failed"] == {}


class TestScriptCommands:
    def test_export(self, tmp_path):
        out = tmp_path / "scripts"
        result = _invoke("export", str(out), "--dialect", "postgresql", "--json")
        assert result.exit_code == 0, result.output
        data = _json(result)["data"]
        assert data["dialect"] == "postgresql"
        assert len(data["files"]) == 10
        assert (out / "cleanup_all.sql").is_file()

    def test_export_then_run(self, tmp_path, cli_db):
        out = tmp_path / "scripts"
        _invoke("export", str(out), "--dialect", "sqlite")
        for name in ("01_create_sample_tables.sql", "02_load_sample_data.sql"):
            result = _invoke("script", str(out / name), "-d", cli_db, "--json")
            assert result.exit_code == 0, result.output
        check = _invoke("check", "-d", cli_db)
        assert check.exit_code == 0, check.output

    def test_script_missing_file(self, tmp_path, cli_db):
        result = _invoke("script", str(tmp_path / "nope.sql"), "-d", cli_db)
        assert result.exit_code == 1


class TestCycle:
    def test_cycle(self, cli_db):
        result = _invoke("cycle", "-d", cli_db, "--json")
        assert result.exit_code == 0, result.output
        data = _json(result)["data"]
        assert data["objects_remaining"] == 0
        assert data["examples_failed"] == {}
