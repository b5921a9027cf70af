"""Pydantic models describing the variables handed to site dotenv files."""
from __future__ import annotations

from pydantic import BaseModel, Field


class SiteVariables(BaseModel):
    """Host routing variables for a site, as set during request matching."""

    site: str = Field(..., description="Name of the active site")
    site_variant: str = Field(default="", description="Variant of the site, if any")
    site_host: str = Field(default="", description="Host name the site is served from")
    site_main_host: str = Field(default="", description="Canonical host name of the site")

    def as_environment(self) -> dict[str, str]:
        return {
            "SITE": self.site,
            "SITE_VARIANT": self.site_variant,
            "SITE_HOST": self.site_host,
            "SITE_MAIN_HOST": self.site_main_host,
        }

    def to_dotenv(self) -> str:
        """Render the variables as ``KEY=VALUE`` lines, one per variable."""

        return "".join(f"{key}={value}\n" for key, value in self.as_environment().items())
