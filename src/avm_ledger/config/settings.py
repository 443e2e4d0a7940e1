"""Settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``AVMLEDGER_``, nested via ``__``)
2. YAML config file (``config_path`` field or ``AVMLEDGER_CONFIG_PATH`` env var)
3. Defaults defined here
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from avm_ledger.avm.constants import MAX_NFT_PAYLOAD_SIZE

# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class CodecConfig(BaseSettings):
    """Decoding behaviour.

    The permissive default accepts anything the wire layout can express.
    Strict mode additionally rejects outputs whose threshold exceeds their
    address count and NFT payloads above ``max_nft_payload_size``.
    """

    model_config = SettingsConfigDict(
        env_prefix="AVMLEDGER_CODEC__",
        case_sensitive=False,
    )

    strict: bool = Field(
        default=False,
        description="Validate threshold and payload size after decoding",
    )
    max_nft_payload_size: int = Field(
        default=MAX_NFT_PAYLOAD_SIZE,
        ge=0,
        description="Largest NFT payload accepted in strict mode, in bytes",
    )


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level configuration.

    Loads settings from environment variables (``AVMLEDGER_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="AVMLEDGER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    version: str = "0.1.0"
    config_path: str = ""

    codec: CodecConfig = Field(default_factory=CodecConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        for key, val in _load_yaml(config_path).items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                values[key] = {**val, **values[key]}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
