"""Client settings from keyword arguments, ``SHIELD_*`` env vars and code defaults.

Priority chain (highest to lowest):
  1. Init kwargs
  2. Env vars (``SHIELD_`` prefix, ``SHIELD_PROGRAM_ID=...``)
  3. Code defaults
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shield_policy.core.accounts import POLICY_SCHEMAS
from shield_policy.core.identity import DEFAULT_PROGRAM_ID, Identity


class ShieldSettings(BaseSettings):
    """Settings shared by every instruction builder.

    Attributes:
        program_id: Base58 id of the shield program deployment to target.
        policy_version: Layout revision newly created policies use.
        verbose: Enable DEBUG logging for ``shield_policy`` loggers.
        log_json: Emit JSON log lines instead of console output.
    """

    model_config = SettingsConfigDict(env_prefix="SHIELD_", frozen=True)

    program_id: str = str(DEFAULT_PROGRAM_ID)
    policy_version: int = Field(default=1)
    verbose: bool = False
    log_json: bool = False

    @field_validator("program_id")
    @classmethod
    def _check_program_id(cls, value: str) -> str:
        Identity.from_string(value)
        return value

    @field_validator("policy_version")
    @classmethod
    def _check_policy_version(cls, value: int) -> int:
        if value not in POLICY_SCHEMAS:
            msg = f"policy_version must be one of {sorted(POLICY_SCHEMAS)}, got {value}"
            raise ValueError(msg)
        return value

    @property
    def program(self) -> Identity:
        """The configured program id as an Identity."""
        return Identity.from_string(self.program_id)


@lru_cache(maxsize=1)
def get_settings() -> ShieldSettings:
    """Process-wide settings read once from the environment."""
    return ShieldSettings()
