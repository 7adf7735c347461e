"""Configuration management for the oaitool application."""
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ValidationError

ENV_PREFIX = "OAI_"

# Request body fields that may carry credentials; never written to logs
REDACT_KEYS = frozenset({"pull_secret", "http_proxy", "https_proxy"})

DEFAULT_API_URL = "https://api.openshift.com/api/assisted-install/v1"
DEFAULT_SSO_URL = "https://sso.redhat.com/auth/realms/redhat-external/protocol/openid-connect/token"
DEFAULT_PULL_SECRET_URL = "https://api.openshift.com/api/accounts_mgmt/v1/access_token"
DEFAULT_CLIENT_ID = "cloud-services"


def default_config_paths() -> List[Path]:
    """Locations searched for a config file when none is given explicitly."""
    home = Path.home()
    return [
        home / ".config" / "oaitool" / "config.yml",
        home / ".oaitool" / "config.yml",
        Path(".oaitool") / "config.yml",
    ]


@dataclass
class Config:
    """Settings for one oaitool invocation.

    Built once at startup by :meth:`load` and passed to whatever needs it.
    """

    offline_token: str = ""
    api_url: str = DEFAULT_API_URL
    sso_url: str = DEFAULT_SSO_URL
    pull_secret_url: str = DEFAULT_PULL_SECRET_URL
    client_id: str = DEFAULT_CLIENT_ID
    api_timeout: int = 30
    verbose: int = 0
    config_file: Optional[str] = None

    @classmethod
    def load(
        cls,
        config_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "Config":
        """
        Build a configuration from every source, lowest precedence first:
        defaults, config file, OAI_* environment variables, ``overrides``.

        Args:
            config_file: Explicit config file; must exist if given
            environ: Environment to read instead of ``os.environ``
            **overrides: Values from the command line; ``None`` means "not given"

        Returns:
            The merged configuration

        Raises:
            ValidationError: if the explicit config file is missing or malformed
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        config = cls()

        path = cls._find_config_file(config_file)
        if path is not None:
            config = replace(config, config_file=str(path), **cls._read_config_file(path))

        config = replace(config, **cls._from_environ(environ))
        config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
        return config

    @staticmethod
    def _find_config_file(config_file: Optional[str]) -> Optional[Path]:
        if config_file:
            path = Path(config_file).expanduser()
            if not path.exists():
                raise ValidationError(f"config file {config_file} does not exist")
            return path

        for candidate in default_config_paths():
            if candidate.exists():
                return candidate
        return None

    @classmethod
    def _read_config_file(cls, path: Path) -> Dict[str, Any]:
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValidationError(f"failed to parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError(f"config file {path} must contain a mapping")
        return cls._known_keys({str(k).replace("-", "_"): v for k, v in data.items()})

    @classmethod
    def _from_environ(cls, environ: Mapping[str, str]) -> Dict[str, Any]:
        values = {
            key[len(ENV_PREFIX):].lower().replace("-", "_"): value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX)
        }
        return cls._known_keys(values)

    @classmethod
    def _known_keys(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        result = {}
        for f in fields(cls):
            if f.name == "config_file" or f.name not in values:
                continue
            value = values[f.name]
            if f.type in (int, "int"):
                try:
                    value = int(value)
                except (TypeError, ValueError) as e:
                    raise ValidationError(f"invalid value for {f.name}: {value}") from e
            else:
                value = str(value)
            result[f.name] = value
        return result

    def validate(self) -> None:
        """Validate required configuration."""
        required = {
            "offline-token": self.offline_token,
            "api-url": self.api_url,
        }
        missing = [k for k, v in required.items() if not v]
        if missing:
            raise ValidationError(f"Missing required configuration: {', '.join(missing)}")
