"""YAML configuration files with conf.d overrides.

For a domain ``db`` the files read are, in order (later wins):

    conf/db.yaml
    conf/db.d/*.yaml, conf/db.d/*.yml   (alphabetical)

``DB_CONFIG_DIR`` replaces ``conf`` for that domain.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings

DEFAULT_CONFIG_DIR = "conf"


def config_files(domain: str, base_dir: str | os.PathLike[str] | None = None) -> list[Path]:
    """Return the existing YAML files for ``domain`` in merge order."""
    root = Path(base_dir or os.getenv(f"{domain.upper()}_CONFIG_DIR", DEFAULT_CONFIG_DIR))

    main = root / f"{domain}.yaml"
    files = [main] if main.is_file() else []

    overrides = root / f"{domain}.d"
    if overrides.is_dir():
        files.extend(sorted([*overrides.glob("*.yaml"), *overrides.glob("*.yml")]))
    return files


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """pydantic-settings YAML source fed by :func:`config_files`."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        domain: str,
        base_dir: str | os.PathLike[str] | None = None,
    ) -> None:
        self.domain = domain
        self.files = config_files(domain, base_dir)
        super().__init__(settings_cls, yaml_file=self.files or None, yaml_file_encoding="utf-8")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self.domain!r}, files={[str(f) for f in self.files]})"
