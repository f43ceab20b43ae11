"""Data models for rejson's renderers.

This module provides type-safe data structures for the environment and
Kubernetes outputs, replacing loosely-typed dictionaries with proper
Python data classes.
"""

import shlex
from dataclasses import dataclass, field
from typing import Any, NamedTuple


class EnvVar(NamedTuple):
    """A single environment variable to export.

    Attributes:
        name: The variable name.
        value: The decrypted value.

    """

    name: str
    value: str

    def export(self) -> str:
        """Return a shell ``export`` statement with the value safely quoted."""
        return f"export {self.name}={shlex.quote(self.value)}"


@dataclass(frozen=True, slots=True)
class KubeSecret:
    """A Kubernetes Secret built from a secrets file.

    Attributes:
        name: The Secret's metadata name.
        namespace: The Secret's namespace, if one was given.
        data: Base64 encoded values keyed by data key.

    """

    name: str
    namespace: str | None = None
    data: dict[str, str] = field(default_factory=dict)

    def to_manifest(self) -> dict[str, Any]:
        """Return the Secret as a Kubernetes manifest mapping."""
        metadata: dict[str, str] = {"name": self.name}
        if self.namespace:
            metadata["namespace"] = self.namespace
        return {
            "apiVersion": "v1",
            "kind": "Secret",
            "metadata": metadata,
            "data": dict(self.data),
        }
