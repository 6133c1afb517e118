"""Connection settings for a Brightspace instance.

Settings are read from the environment, the same variables the Valence
tooling has always used:

    D2L_VALENCE_APP_ID, D2L_VALENCE_APP_KEY
    D2L_VALENCE_USER_ID, D2L_VALENCE_USER_KEY
    D2L_VALENCE_HOST, D2L_VALENCE_PORT, D2L_VALENCE_SCHEME
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "D2L_VALENCE_"

_REQUIRED = ("APP_ID", "APP_KEY", "USER_ID", "USER_KEY", "HOST")


@dataclass(frozen=True)
class ValenceConfig:
    """Credentials and host information for the Valence API.

    Attributes:
        app_id: Application ID issued by the Brightspace admin.
        app_key: Application key paired with `app_id`.
        user_id: User ID of the service account.
        user_key: User key paired with `user_id`.
        host: Brightspace host name, e.g. `lms.example.edu`.
        port: TCP port, defaults to 443.
        scheme: `https` or `http`.
    """

    app_id: str
    app_key: str
    user_id: str
    user_key: str
    host: str
    port: int = 443
    scheme: str = "https"

    @property
    def base_url(self) -> str:
        default_port = {"https": 443, "http": 80}.get(self.scheme)
        if self.port == default_port:
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"

    @classmethod
    def from_environ(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> ValenceConfig:
        """Build a config from `D2L_VALENCE_*` environment variables.

        Parameters:
            environ: mapping to read from, defaults to `os.environ`.

        Raises:
            ConfigurationError: a required variable is missing or the port
                is not an integer.
        """
        env = os.environ if environ is None else environ

        missing = [
            f"{ENV_PREFIX}{name}"
            for name in _REQUIRED
            if not env.get(f"{ENV_PREFIX}{name}")
        ]
        if missing:
            raise ConfigurationError(
                f"Missing Valence settings in environment: {', '.join(missing)}"
            )

        port = env.get(f"{ENV_PREFIX}PORT") or "443"
        try:
            port_number = int(port)
        except ValueError as err:
            raise ConfigurationError(
                f"{ENV_PREFIX}PORT must be an integer, got {port!r}"
            ) from err

        config = cls(
            app_id=env[f"{ENV_PREFIX}APP_ID"],
            app_key=env[f"{ENV_PREFIX}APP_KEY"],
            user_id=env[f"{ENV_PREFIX}USER_ID"],
            user_key=env[f"{ENV_PREFIX}USER_KEY"],
            host=env[f"{ENV_PREFIX}HOST"],
            port=port_number,
            scheme=(env.get(f"{ENV_PREFIX}SCHEME") or "https").lower(),
        )
        logger.debug("Loaded Valence settings for %s", config.base_url)
        return config
