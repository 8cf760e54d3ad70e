"""Shared fixtures: route files on disk for the CLI tests."""

from pathlib import Path

import pytest

ROUTES = """\
gateway:
  host: 0.0.0.0
  port: 9000
routes:
  - path: /
    pathType: Prefix
    backend: web:80
  - path: /api/
    pathType: Prefix
    rewriteTarget: /
    backend: notes-svc:8000
  - path: /healthz
    pathType: Exact
    backend: health:9090
"""


@pytest.fixture
def routes_file(tmp_path: Path) -> Path:
    path = tmp_path / "routes.yaml"
    path.write_text(ROUTES, encoding="utf-8")
    return path


@pytest.fixture
def exact_only_file(tmp_path: Path) -> Path:
    """The classic misconfiguration: Exact where Prefix was meant."""
    path = tmp_path / "ingress.yaml"
    path.write_text(
        "routes:\n  - path: /api\n    pathType: Exact\n    backend: notes-svc:8000\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def broken_file(tmp_path: Path) -> Path:
    path = tmp_path / "broken.yaml"
    path.write_text("routes:\n  - path: api\n    backend: svc:80\n", encoding="utf-8")
    return path
