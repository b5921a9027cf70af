from __future__ import annotations

from pathlib import Path

import pytest

from sitenv import bootstrap as bootstrap_module
from sitenv.config import settings


class DummyMatcher:
    def __init__(self, site: str):
        self.site = site

    def match(self) -> str:
        return self.site


@pytest.fixture(autouse=True)
def _isolated_project(monkeypatch: pytest.MonkeyPatch, project_root: Path) -> None:
    monkeypatch.setattr(settings, "dotenv_dir", project_root / "dotenv")
    monkeypatch.setattr(settings, "root_dir", project_root)
    monkeypatch.setattr(settings, "env_id_variable", "PHAPP_ENV")


def test_bootstrap_loads_app_and_matched_site(dotenv_dir: Path) -> None:
    (dotenv_dir / "app.env").write_text("APP_NAME=demo", encoding="utf-8")
    (dotenv_dir / "site--globex.env").write_text("SITE_MAIL=ops@globex.test", encoding="utf-8")
    environ = {"PHAPP_ENV": "prod", "APP_SITE_DOMAIN--globex": "globex.test"}

    bootstrap_module.bootstrap(DummyMatcher("globex"), environ=environ)

    assert environ["APP_NAME"] == "demo"
    assert environ["SITE_MAIL"] == "ops@globex.test"
    # Host variables are left to the request matcher outside the CLI.
    assert "SITE_HOST" not in environ


def test_bootstrap_without_matcher_loads_app_only(dotenv_dir: Path) -> None:
    (dotenv_dir / "site.env").write_text("SITE_MAIL=ops@example.test", encoding="utf-8")
    environ = {"PHAPP_ENV": "dev"}

    bootstrap_module.bootstrap(environ=environ)

    assert "SITE_MAIL" not in environ


def test_bootstrap_exits_without_environment() -> None:
    with pytest.raises(SystemExit) as excinfo:
        bootstrap_module.bootstrap(environ={})
    assert excinfo.value.code == 1


def test_bootstrap_site_files_expand_app_and_env_id(monkeypatch: pytest.MonkeyPatch, dotenv_dir: Path) -> None:
    monkeypatch.setenv("OUTSIDE_ONLY", "from-process")
    (dotenv_dir / "app.env").write_text("APP_DOMAIN=example.com\nLEAKED=${OUTSIDE_ONLY}", encoding="utf-8")
    (dotenv_dir / "site--acme.env").write_text("SITE_URL=https://acme.${APP_DOMAIN}/${PHAPP_ENV}", encoding="utf-8")
    environ = {"PHAPP_ENV": "prod"}

    bootstrap_module.bootstrap(DummyMatcher("acme"), environ=environ)

    assert environ["SITE_URL"] == "https://acme.example.com/prod"
    assert environ["LEAKED"] == ""
