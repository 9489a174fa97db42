"""Environment accumulation for ``{{variable}}`` placeholders."""

import re
import time
import uuid
from pathlib import Path

from .collection import Environment, EnvironmentValue

PLACEHOLDER = re.compile(r"\{\{\s*([^{}\s]+)\s*\}\}")


class EnvironmentBuilder:
    """Collects every variable a collection references, once per key.

    Inactive (every call a no-op, ``build`` returns None) unless a target
    file name was given.
    """

    def __init__(self, target: str | None = None):
        self.environment: Environment | None = None
        self._keys: set[str] = set()
        if target:
            self.environment = Environment(
                id=str(uuid.uuid4()),
                name=_environment_name(target),
                timestamp=int(time.time() * 1000),
            )

    @property
    def active(self) -> bool:
        return self.environment is not None

    def add(self, name: str) -> None:
        if self.environment is None or name in self._keys:
            return
        self._keys.add(name)
        self.environment.values.append(EnvironmentValue(key=name))

    def add_placeholders(self, value: object) -> None:
        """Register every ``{{name}}`` found in a string or nested structure."""
        if isinstance(value, str):
            for name in PLACEHOLDER.findall(value):
                self.add(name)
        elif isinstance(value, dict):
            for item in value.values():
                self.add_placeholders(item)
        elif isinstance(value, list):
            for item in value:
                self.add_placeholders(item)

    def build(self) -> Environment | None:
        return self.environment


def _environment_name(target: str) -> str:
    name = Path(target).name
    if name.endswith(".json"):
        name = name[: -len(".json")]
    return name
