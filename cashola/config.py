from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = '.cashola/'
DEFAULT_IGNORE_ENV_VAR = 'IGNORE_CASHOLA'
DEFAULT_CONFIG_PATH = Path('cashola.yml')


class CasholaConfig(BaseModel):
    """Process-wide cashola settings.

    Field names are snake_case; the camelCase names used by older config
    files (`storageDir`, `ignoreCasholaEnvVar`, `ignoreCashola`) are accepted
    as aliases.
    """
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    storage_dir: str = Field(default=DEFAULT_STORAGE_DIR, alias='storageDir', min_length=1)
    ignore_cashola_env_var: str = Field(default=DEFAULT_IGNORE_ENV_VAR, alias='ignoreCasholaEnvVar', min_length=1)
    ignore_cashola: bool = Field(default=False, alias='ignoreCashola')
    log_level: Optional[str] = Field(default=None, alias='logLevel')

    def is_ignored(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        """Return True when storage should be bypassed entirely.

        An explicit `ignore_cashola=True` wins; otherwise the configured
        environment variable must equal the exact string 'true'.
        """
        if self.ignore_cashola:
            return True
        env = os.environ if environ is None else environ
        return env.get(self.ignore_cashola_env_var) == 'true'

    def updated(self, **options) -> 'CasholaConfig':
        """Return a validated copy with `options` applied on top."""
        data = self.model_dump()
        data.update(CasholaConfig.model_validate(options).model_dump(exclude_unset=True))
        return CasholaConfig.model_validate(data)


def load_yaml_file(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_config(path: Optional[Path | str] = None) -> CasholaConfig:
    """Load a `CasholaConfig` from a YAML file.

    A missing file yields the defaults; an invalid option raises
    `pydantic.ValidationError`.
    """
    cfg_path = Path(path) if path else DEFAULT_CONFIG_PATH
    raw = load_yaml_file(cfg_path)
    logger.debug('Loaded cashola config from %s: %s', cfg_path, raw)
    return CasholaConfig.model_validate(raw)
