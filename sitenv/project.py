"""Project-specific environment detection."""
from __future__ import annotations

import os
from typing import Mapping, Optional

from .config import settings
from .loader import InvocationMode
from .models.schemas import SiteVariables

DEFAULT_SITE = "default"


class ProjectEnvironmentResolver:
    """Detects environment and site from ``PHAPP_ENV`` and ``SITE`` variables."""

    def __init__(
        self,
        *,
        mode: InvocationMode = InvocationMode.CLI,
        environ: Optional[Mapping[str, str]] = None,
        env_id_variable: Optional[str] = None,
    ):
        self.mode = mode
        self.environ = os.environ if environ is None else environ
        self.env_id_variable = env_id_variable or settings.env_id_variable

    def determine_environment(self) -> Optional[str]:
        return self.environ.get(self.env_id_variable) or None

    def determine_active_site(self) -> str:
        return self.environ.get("SITE") or self.environ.get("APP_DEFAULT_SITE") or DEFAULT_SITE

    def get_default_environment(self, site: str) -> str:
        # During requests the site matcher provides these variables, so they
        # are only generated for CLI invocations.
        if self.mode is not InvocationMode.CLI:
            return ""
        return self.request_matcher_site_variables(site).to_dotenv()

    def request_matcher_site_variables(self, site: Optional[str] = None) -> SiteVariables:
        """Return the same site variables as set during request matching."""

        site = site or self.determine_active_site()
        domain = self.environ.get("APP_MULTISITE_DOMAIN")
        if domain:
            separator = self.environ.get("APP_MULTISITE_DOMAIN_PREFIX_SEPARATOR", "")
            host = f"{site}{separator}{domain}"
        else:
            host = self.environ.get(f"APP_SITE_DOMAIN--{site}", "")
        return SiteVariables(site=site, site_variant="", site_host=host, site_main_host=host)
