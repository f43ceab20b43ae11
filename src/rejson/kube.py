"""Kubernetes Secret manifests from decrypted secrets files.

Secrets are read from the top-level "kubernetes" object, one child object
per Secret:

    {
      "kubernetes": {
        "database": {
          "_namespace": "testing",
          "DATABASE_URL": "..."
        }
      }
    }

The optional "_namespace" key sets the Secret's namespace. Any other key
starting with an underscore is left out of the Secret's data.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping

import yaml
from icecream import ic

from rejson.document import IGNORE_PREFIX, SecretsFile
from rejson.flatten import SEPARATOR, flatten, split_path
from rejson.models import KubeSecret

KUBERNETES_FIELD = "kubernetes"
NAMESPACE_KEY = "_namespace"


def _b64(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


class SecretsManifest:
    """A set of Kubernetes Secrets built from a flattened map.

    Each path of the form ``<name>.<key>`` becomes the data entry ``key``
    of the Secret ``name``. Secrets are ordered by name and their data by
    key so the rendered output is stable.
    """

    def __init__(self, flat: Mapping[str, str]) -> None:
        namespaces: dict[str, str] = {}
        data: dict[str, dict[str, str]] = {}

        for path, value in sorted(flat.items()):
            name, *rest = split_path(path)
            if not rest:
                continue
            key = SEPARATOR.join(rest)

            entries = data.setdefault(name, {})
            if key == NAMESPACE_KEY:
                namespaces[name] = value
            elif not key.startswith(IGNORE_PREFIX):
                entries[key] = _b64(value)

        self.secrets: list[KubeSecret] = [
            KubeSecret(name=name, namespace=namespaces.get(name), data=dict(sorted(entries.items())))
            for name, entries in sorted(data.items())
        ]
        ic([secret.name for secret in self.secrets])

    @classmethod
    def from_secrets_file(cls, secrets_file: SecretsFile) -> SecretsManifest:
        """Build the manifest from the "kubernetes" object of a decrypted file."""
        root = secrets_file.value.get(KUBERNETES_FIELD)
        if not isinstance(root, dict):
            return cls({})
        return cls(flatten(root))

    def render(self) -> str:
        """Render every Secret as a multi-document YAML stream."""
        if not self.secrets:
            return ""
        return yaml.safe_dump_all(
            (secret.to_manifest() for secret in self.secrets),
            explicit_start=True,
            sort_keys=False,
            default_flow_style=False,
        )

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self.secrets)
