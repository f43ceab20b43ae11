"""Shell environment exports from decrypted secrets files.

Variables are read from the direct string children of the top-level
"environment" object. A single leading underscore is dropped from the
name, so a value can be kept unencrypted and still be exported under
its plain name.
"""

import re

from icecream import ic

from rejson.document import IGNORE_PREFIX, SecretsFile
from rejson.exceptions import InvalidEnvironmentKeyError
from rejson.models import EnvVar

ENVIRONMENT_FIELD = "environment"

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def exports(secrets_file: SecretsFile) -> list[EnvVar]:
    """Collect the environment variables declared in a secrets file.

    Returns:
        One EnvVar per string child of "environment", in file order. An
        empty list if the file has no "environment" object.

    Raises:
        InvalidEnvironmentKeyError: If a key is not a valid shell identifier.

    """
    children = secrets_file.children(ENVIRONMENT_FIELD) or {}
    variables: list[EnvVar] = []
    for key, value in children.items():
        name = key.removeprefix(IGNORE_PREFIX)
        if not _IDENTIFIER.fullmatch(name):
            raise InvalidEnvironmentKeyError(f"'{key}' is not a valid environment variable name")
        variables.append(EnvVar(name=name, value=value))

    ic([variable.name for variable in variables])
    return variables


def render(secrets_file: SecretsFile) -> str:
    """Render the file's environment as ``export`` lines, one per variable."""
    return "\n".join(variable.export() for variable in exports(secrets_file))
