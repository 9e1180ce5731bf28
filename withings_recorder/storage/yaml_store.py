"""Credential record kept in a YAML file on the local disk."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import StorageError
from ..models import Credential

logger = logging.getLogger(__name__)


def _plain_keys(data: dict) -> dict:
    """Map Ruby symbol keys such as ``:client_id`` to ``client_id``."""

    return {
        key[1:] if isinstance(key, str) and key.startswith(":") else key: value
        for key, value in data.items()
    }


class YamlCredentialStore:
    """Read and atomically replace a YAML credential file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> Credential:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as exc:
            raise StorageError(f"Credential file {self.path} does not exist") from exc
        except (OSError, yaml.YAMLError) as exc:
            raise StorageError(f"Cannot read credential file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"Credential file {self.path} does not hold a mapping")
        try:
            return Credential.model_validate(_plain_keys(data))
        except ValidationError as exc:
            raise StorageError(f"Invalid credential file {self.path}: {exc}") from exc

    def save(self, credential: Credential) -> None:
        """Write to a sibling temp file, then rename it over the target."""

        document = yaml.safe_dump(
            credential.model_dump(), default_flow_style=False, sort_keys=False
        )
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write credential file {self.path}: {exc}") from exc
        logger.debug("saved credentials to %s", self.path)


__all__ = ["YamlCredentialStore"]
