"""Runtime settings resolved from the environment."""

from functools import cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from clispec.models import SettingsModel

ENV_PREFIX = 'CLISPEC_'


class SpecSettings(SettingsModel):
    """Settings controlling declaration checks.

    Values are read from environment variables prefixed with `CLISPEC_`.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    legacy_flag_check: bool = Field(
        default=False,
        title='Legacy flag name check',
        description=(
            'Check new flag names against declared options instead of '
            'declared flags. A redeclared flag then replaces the previous '
            'one with a warning instead of failing.'
        ),
    )


@cache
def get_settings() -> SpecSettings:
    """Return the cached settings instance.

    Returns:
        Settings resolved from the environment on first call.
    """
    return SpecSettings()
