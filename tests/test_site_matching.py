from __future__ import annotations

from sitenv.services.site_matching import HostSiteMatcher


def test_match_with_multisite_domain() -> None:
    environ = {
        "APP_SITES": "acme globex",
        "APP_MULTISITE_DOMAIN": "example.com",
        "APP_MULTISITE_DOMAIN_PREFIX_SEPARATOR": "-",
    }
    assert HostSiteMatcher("globex-example.com:8080", environ=environ).match() == "globex"


def test_match_with_site_domains() -> None:
    environ = {
        "APP_SITES": "acme globex",
        "APP_SITE_DOMAIN--acme": "www.acme.test",
        "APP_SITE_DOMAIN--globex": "www.globex.test",
    }
    assert HostSiteMatcher("WWW.ACME.TEST", environ=environ).match() == "acme"


def test_host_read_from_environment() -> None:
    environ = {"APP_SITES": "acme", "APP_SITE_DOMAIN--acme": "acme.test", "HTTP_HOST": "acme.test"}
    assert HostSiteMatcher(environ=environ).match() == "acme"


def test_unknown_host_falls_back_to_default_site() -> None:
    environ = {"APP_SITES": "acme", "APP_SITE_DOMAIN--acme": "acme.test", "APP_DEFAULT_SITE": "acme"}
    assert HostSiteMatcher("unknown.test", environ=environ).match() == "acme"
    assert HostSiteMatcher("unknown.test", environ={}).match() == "default"
