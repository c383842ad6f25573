# SPDX-License-Identifier: MPL-2.0
"""Runtime configuration read from the environment.

``ROOTSIG_LOG_LEVEL``
    Logging level name for the CLI (default ``WARNING``).
``ROOTSIG_ROOT_KID``
    NaCl key identifier used when a kbsig is verified without ``--kid``.
``ROOTSIG_PGP_KEY``
    Path to a PGP certificate used when ``--key`` is not given.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from rootsig.core.crypto import decode_key_id
from rootsig.core.exceptions import ConfigurationError, MalformedInputError
from rootsig.core.verification import KEYBASE_ROOT_KID


class Settings(BaseModel):
    """rootsig settings."""

    log_level: str = "WARNING"
    root_kid: str = KEYBASE_ROOT_KID
    pgp_key: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("root_kid")
    @classmethod
    def _decodable_kid(cls, value: str) -> str:
        value = value.strip().lower()
        try:
            decode_key_id(value)
        except MalformedInputError as exc:
            raise ValueError(exc.message) from exc
        return value


def get_settings() -> Settings:
    """Build settings from ``ROOTSIG_*`` environment variables."""
    values = {
        "log_level": os.getenv("ROOTSIG_LOG_LEVEL"),
        "root_kid": os.getenv("ROOTSIG_ROOT_KID"),
        "pgp_key": os.getenv("ROOTSIG_PGP_KEY"),
    }
    try:
        return Settings(**{k: v for k, v in values.items() if v})
    except ValidationError as exc:
        raise ConfigurationError(f"invalid configuration: {exc}") from exc


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
