"""
Upload configuration.

Values come from CLI arguments first and environment variables second.
Validation happens before the pipeline starts so a misconfigured run fails fast.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import os

from .errors import ConfigError
from .models import normalize_prefix

DEFAULT_REGION = "auto"
DEFAULT_ENDPOINT = "https://fly.storage.tigris.dev"
DEFAULT_WORKERS = 10

# field name -> environment variable consulted when the CLI value is missing
ENV_VARS = {
    "access_key_id": "AWS_ACCESS_KEY_ID",
    "secret_access_key": "AWS_SECRET_ACCESS_KEY",
    "region": "AWS_REGION",
    "endpoint": "AWS_ENDPOINT_URL_S3",
    "bucket": "UPLOAD_BUCKET",
    "folder": "UPLOAD_FOLDER",
    "prefix": "UPLOAD_PREFIX",
    "workers": "UPLOAD_WORKERS",
}

_REQUIRED = {
    "access_key_id": "--access-key-id",
    "secret_access_key": "--secret-access-key",
    "bucket": "--bucket",
    "folder": "--folder",
}


def _mask(secret: str) -> str:
    if not secret:
        return "(missing)"
    if len(secret) <= 4:
        return "****"
    return f"{secret[:4]}****"


@dataclass(frozen=True)
class UploadConfig:
    """Immutable configuration for a bulk upload run."""
    access_key_id: str = ""
    secret_access_key: str = ""
    bucket: str = ""
    folder: str = ""
    prefix: str = ""
    region: str = DEFAULT_REGION
    endpoint: str = DEFAULT_ENDPOINT
    workers: int = DEFAULT_WORKERS

    @property
    def base_dir(self) -> str:
        """Absolute form of the source folder, used to derive object keys."""
        return os.path.abspath(os.path.expanduser(self.folder))

    @property
    def key_prefix(self) -> str:
        return normalize_prefix(self.prefix)

    def validate(self) -> "UploadConfig":
        """
        Check required options and value ranges.

        Returns:
            self, for chaining

        Raises:
            ConfigError: on missing or invalid options
        """
        missing = [flag for name, flag in _REQUIRED.items() if not getattr(self, name)]
        if missing:
            raise ConfigError(
                f"All parameters {', '.join(_REQUIRED.values())} are required "
                f"(missing: {', '.join(missing)})",
                missing=missing,
            )
        if self.workers < 1:
            raise ConfigError(f"--workers must be a positive integer, got {self.workers}")

        folder = Path(self.base_dir)
        if not folder.exists():
            raise ConfigError(f"--folder does not exist: {self.folder}")
        if not folder.is_dir():
            raise ConfigError(f"--folder is not a directory: {self.folder}")
        return self

    def summary(self) -> Dict[str, Any]:
        """Display-friendly view with the secret masked."""
        return {
            "Folder": self.folder or "(missing)",
            "Bucket": self.bucket or "(missing)",
            "Prefix": self.key_prefix or "-",
            "Endpoint": self.endpoint,
            "Region": self.region,
            "Access Key": self.access_key_id or "(missing)",
            "Secret Key": _mask(self.secret_access_key),
            "Workers": self.workers,
        }

    @classmethod
    def from_sources(
        cls,
        values: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "UploadConfig":
        """
        Merge explicit values with environment variables.

        Args:
            values: Explicit values (e.g. parsed CLI args); None means unset
            environ: Environment mapping (default: os.environ)

        Raises:
            ConfigError: if workers is not an integer
        """
        values = dict(values or {})
        environ = os.environ if environ is None else environ

        resolved: Dict[str, Any] = {}
        for name, env_name in ENV_VARS.items():
            value = values.get(name)
            if value is None or value == "":
                value = environ.get(env_name)
            if value is None or value == "":
                continue
            resolved[name] = value

        if "workers" in resolved:
            try:
                resolved["workers"] = int(resolved["workers"])
            except (TypeError, ValueError) as e:
                raise ConfigError(f"--workers must be an integer, got {resolved['workers']!r}") from e

        return cls(**resolved)
