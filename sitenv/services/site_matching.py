"""Matching of the incoming host name to one of the configured sites."""
from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Protocol

from ..project import DEFAULT_SITE

logger = logging.getLogger(__name__)


class SiteMatcher(Protocol):
    def match(self) -> str:
        """Return the name of the site serving the current request."""


class HostSiteMatcher:
    """Resolves the site from a host name.

    Sites are listed in ``APP_SITES``. With ``APP_MULTISITE_DOMAIN`` set, sites
    are served from ``<site><APP_MULTISITE_DOMAIN_PREFIX_SEPARATOR><domain>``;
    otherwise each site's host is read from ``APP_SITE_DOMAIN--<site>``.
    """

    def __init__(self, host: Optional[str] = None, *, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        raw_host = host if host is not None else self.environ.get("HTTP_HOST", "")
        self.host = raw_host.split(":", 1)[0].strip().lower()

    @property
    def sites(self) -> list[str]:
        return self.environ.get("APP_SITES", "").split()

    def host_for(self, site: str) -> str:
        domain = self.environ.get("APP_MULTISITE_DOMAIN")
        if domain:
            separator = self.environ.get("APP_MULTISITE_DOMAIN_PREFIX_SEPARATOR", "")
            return f"{site}{separator}{domain}"
        return self.environ.get(f"APP_SITE_DOMAIN--{site}", "")

    def match(self) -> str:
        if self.host:
            for site in self.sites:
                if self.host_for(site).lower() == self.host:
                    return site
            logger.warning("No site configured for host %s, using the default site", self.host)
        return self.environ.get("APP_DEFAULT_SITE") or DEFAULT_SITE
