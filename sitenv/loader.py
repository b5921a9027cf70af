"""Assembly of app and site environment variables from layered dotenv files."""
from __future__ import annotations

import io
import logging
import os
from enum import Enum
from pathlib import Path
from typing import MutableMapping, Optional, Protocol

from dotenv.parser import parse_stream
from dotenv.variables import parse_variables

from .config import settings
from .layers import read_layers

logger = logging.getLogger(__name__)

LOADED_VARS_VARIABLE = "SITENV_DOTENV_VARS"
DEFAULT_ENV_ID_VARIABLE = "ENV_ID"


class InvocationMode(str, Enum):
    """How the loader was started."""

    CLI = "cli"
    BOOT = "boot"


class MissingEnvironmentError(RuntimeError):
    """Raised when neither a .env file nor the environment id is available."""

    def __init__(self, variable: str):
        super().__init__(
            f"Missing .env file or {variable} environment variable. "
            "Make sure the application is setup correctly."
        )
        self.variable = variable


class EnvironmentResolver(Protocol):
    """Project-specific hooks used by the loader.

    Resolvers may set ``env_id_variable`` to name the variable holding the
    environment id; ``ENV_ID`` is used otherwise.
    """

    def determine_environment(self) -> Optional[str]:
        """Return the id of the active environment, e.g. ``prod``, if any."""

    def determine_active_site(self) -> str:
        """Return the name of the active site."""

    def get_default_environment(self, site: str) -> str:
        """Return dotenv text with default variables for the given site.

        The variables are available to all ``site*.env`` files.
        """


class EnvironmentLoader:
    """Loads layered dotenv files into an environment mapping."""

    def __init__(
        self,
        resolver: EnvironmentResolver,
        *,
        environ: Optional[MutableMapping[str, str]] = None,
        dotenv_dir: Optional[Path] = None,
        root_dir: Optional[Path] = None,
    ):
        self.resolver = resolver
        self.environ = os.environ if environ is None else environ
        self.dotenv_dir = Path(dotenv_dir or settings.dotenv_dir)
        self.root_dir = Path(root_dir or settings.root_dir)

    @property
    def env_id_variable(self) -> str:
        return getattr(self.resolver, "env_id_variable", None) or DEFAULT_ENV_ID_VARIABLE

    @property
    def env_file(self) -> Path:
        return self.root_dir / ".env"

    @property
    def local_env_file(self) -> Path:
        return self.root_dir / ".env.local"

    def get_app_environment_variables(self, prefer_existing: bool = True) -> str:
        """Return dotenv text for the whole app.

        An existing ``.env`` file is returned verbatim when ``prefer_existing``
        is set. Otherwise the ``app--<env-id>`` layers are assembled, preceded by
        the environment id assignment and followed by ``.env.local``.
        """

        if prefer_existing and self.env_file.is_file():
            logger.debug("Using existing dotenv file %s", self.env_file)
            return self.env_file.read_text(encoding="utf-8")

        variable = self.env_id_variable
        env_id = self.resolver.determine_environment()
        if not env_id:
            raise MissingEnvironmentError(variable)

        contents = [f"{variable}={env_id}"]
        contents.extend(read_layers(f"app--{env_id}", self.dotenv_dir).values())
        if self.local_env_file.is_file():
            logger.debug("Applying local overrides from %s", self.local_env_file)
            contents.append(self.local_env_file.read_text(encoding="utf-8"))
        return "\n".join(contents)

    def get_site_environment_variables(self, site: Optional[str] = None) -> str:
        """Return dotenv text for a site, defaulting to the active one."""

        site = site or self.resolver.determine_active_site()
        env_id = self.environ.get(self.env_id_variable, "")
        contents = [self.resolver.get_default_environment(site)]
        contents.extend(read_layers(f"site--{site}--{env_id}", self.dotenv_dir).values())
        return "\n".join(contents)

    def parse(self, text: str) -> dict[str, str]:
        """Parse dotenv text, expanding ${VAR} references.

        References resolve against values parsed earlier in the text, then
        against the environment mapping. Keys without a value are dropped.
        """

        values: dict[str, str] = {}
        for binding in parse_stream(io.StringIO(text)):
            if binding.key is None or binding.value is None:
                continue
            scope = {**self.environ, **values}
            values[binding.key] = "".join(atom.resolve(scope) for atom in parse_variables(binding.value))
        return values

    def populate(self, values: dict[str, str], override: bool = False) -> None:
        """Write parsed values into the environment mapping.

        Variables already set are left alone unless ``override`` is given or
        they were written by an earlier populate call.
        """

        raw_loaded = self.environ.get(LOADED_VARS_VARIABLE, "")
        loaded = [name for name in raw_loaded.split(",") if name]
        updated = False
        for name, value in values.items():
            if not override and name not in loaded and name in self.environ:
                logger.debug("Keeping existing value of %s", name)
                continue
            self.environ[name] = value
            if name not in loaded:
                loaded.append(name)
            updated = True
        if updated:
            self.environ[LOADED_VARS_VARIABLE] = ",".join(loaded)

    def load(self, app_only: bool = True) -> "EnvironmentLoader":
        """Populate app variables and, unless ``app_only``, site variables."""

        self.populate(self.parse(self.get_app_environment_variables()))
        if not app_only:
            self.load_site()
        return self

    def load_site(self, site: Optional[str] = None) -> "EnvironmentLoader":
        text = self.get_site_environment_variables(site)
        self.populate(self.parse(text))
        logger.info("Loaded site environment for %s", site or self.environ.get("SITE", ""))
        return self
