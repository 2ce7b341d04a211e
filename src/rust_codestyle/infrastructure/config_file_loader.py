"""Load rule options from Cargo.toml metadata. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

from rust_codestyle.domain.errors import ConfigurationError

METADATA_KEY = "codestyle"


class ConfigFileLoader:
    """
    Loads ``[workspace.metadata.codestyle]`` and ``[package.metadata.codestyle]``
    from the nearest Cargo.toml at or above the run root.
    """

    @staticmethod
    def find_manifest(root: str) -> Optional[Path]:
        current_path = Path(root).resolve()
        if current_path.is_file():
            current_path = current_path.parent
        while True:
            manifest = current_path / "Cargo.toml"
            if manifest.is_file():
                return manifest
            if current_path.parent == current_path:
                return None
            current_path = current_path.parent

    @staticmethod
    def load_rule_options(root: str) -> dict[str, object]:
        """Rule options from the manifest; package settings override workspace ones."""
        manifest = ConfigFileLoader.find_manifest(root)
        if manifest is None:
            return {}
        try:
            with manifest.open("rb") as f:
                data = toml_lib.load(f)
        except toml_lib.TOMLDecodeError as exc:
            raise ConfigurationError(f"{manifest}: invalid TOML: {exc}") from exc
        except OSError:
            return {}
        options: dict[str, object] = {}
        for section in ("workspace", "package"):
            table = data.get(section, {}).get("metadata", {}).get(METADATA_KEY, {})
            if not isinstance(table, dict):
                raise ConfigurationError(
                    f"{manifest}: [{section}.metadata.{METADATA_KEY}] must be a table")
            options.update(table)
        return options
