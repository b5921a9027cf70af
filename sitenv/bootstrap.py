"""Early process bootstrap: populate the environment before the app starts."""
from __future__ import annotations

import logging
import os
import sys
from typing import MutableMapping, Optional

from .loader import EnvironmentLoader, InvocationMode, MissingEnvironmentError
from .project import ProjectEnvironmentResolver
from .services.site_matching import SiteMatcher

logger = logging.getLogger(__name__)


def bootstrap(
    matcher: Optional[SiteMatcher] = None,
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> EnvironmentLoader:
    """Load the app environment, then the site environment for ``matcher``.

    Site variables are only loaded when a matcher is given, since matching the
    request to a site is left up to the application.
    """

    environ = os.environ if environ is None else environ
    resolver = ProjectEnvironmentResolver(mode=InvocationMode.BOOT, environ=environ)
    loader = EnvironmentLoader(resolver, environ=environ)
    try:
        loader.load()
    except MissingEnvironmentError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    if matcher is not None:
        loader.load_site(matcher.match())
    return loader
