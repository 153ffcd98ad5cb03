from __future__ import annotations

import json
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from post_parser.errors import ConfigurationError

from .definitions import FormatSpec


class DefinitionStore(BaseModel):
    """Load input definitions from YAML or JSON run configuration files.

    A file holds either one definition or a list of them.
    """

    base_dirs: List[Path] = []

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def load(self, path: Path | str) -> List[FormatSpec]:
        path = Path(path)
        if not path.is_absolute() and not path.exists():
            for base in self.base_dirs:
                if (base / path).exists():
                    path = base / path
                    break

        text = path.read_text()
        try:
            data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as err:
            raise ConfigurationError(f"Failed parsing '{path}': {err}") from err

        items = data if isinstance(data, list) else [data]
        try:
            return [FormatSpec.model_validate(item) for item in items]
        except ValidationError as err:
            raise ConfigurationError(f"Invalid definition in '{path}': {err}") from err
