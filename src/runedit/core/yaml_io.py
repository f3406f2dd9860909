"""Reading and writing pydantic models as YAML documents"""

from pathlib import Path
from typing import Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError


M = TypeVar("M", bound=BaseModel)


def read_model(path: Path, model: Type[M], error: Type[Exception], what: str) -> M:
    """Load ``path`` as a ``model``; every failure is raised as ``error``

    ``what`` names the document in messages, e.g. "config file".
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise error(f"Invalid YAML in {what}: {e}")

    if data is None:
        raise error(f"{what.capitalize()} is empty: {path}")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise error(f"Invalid {what}: {e}")


def write_model(path: Path, model: BaseModel) -> Path:
    """Dump ``model`` to ``path`` in field order, creating parent folders"""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(model.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return path
