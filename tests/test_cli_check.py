"""Tests for waypoint.cli._check and _routes — validation and listing."""

from pathlib import Path

import pytest

from waypoint.cli import main


class TestWaypointCheck:
    def test_valid_file(self, routes_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", str(routes_file)])

        out = capsys.readouterr().out
        assert "OK: 3 routes (1 Exact, 2 Prefix)" in out
        assert "Gateway: 0.0.0.0:9000" in out
        assert "note: Exact route '/healthz'" in out

    def test_invalid_file_exits_one(
        self, broken_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(broken_file)])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_malformed_ingress_exits_one(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "ingress.yaml"
        path.write_text(
            "apiVersion: networking.k8s.io/v1\nkind: Ingress\nmetadata: oops\n",
            encoding="utf-8",
        )

        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(path)])
        assert exc_info.value.code == 1
        assert "'metadata' must be a mapping" in capsys.readouterr().err

    def test_missing_file_exits_one(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_path / "missing.yaml")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestWaypointRoutes:
    def test_lists_routes_in_order(
        self, routes_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", str(routes_file)])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["MODE", "PATH", "REWRITE", "BACKEND"]
        assert set(lines[1]) == {"-"}
        assert lines[2].split() == ["Prefix", "/", "-", "web:80"]
        assert lines[3].split() == ["Prefix", "/api/", "/", "notes-svc:8000"]
        assert lines[4].split() == ["Exact", "/healthz", "-", "health:9090"]

    def test_invalid_file_exits_one(self, broken_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(broken_file)])
        assert exc_info.value.code == 1
