"""Shared test fixtures for rejson tests."""

import json

import pytest

from rejson.crypto.keys import KeyPair

# A key pair with values encrypted for it by another EJSON implementation.
PUB_KEY = "b595226c62427adbfc4a809cd7577488a6d402b2f930e1d603164ae3191a616e"
PRIV_KEY = "88649a9e83f8f1984ad35ac8e8e86529aab518572c0341f46d1e0bc97f676f2b"

# "secret"
SECRET_VALUE = (
    "EJ[1:l6yw664nxaddSXGiWUZfuVeoUSpTFHzqAyCpfF8Awxc=:xOfucLDkACGlPCyJ6QViggEidVswUlsH:"
    "B/f3DJMkdZHF+Wu9F6XUFwuTmxyfBA==]"
)

# A value containing shell metacharacters and quotes.
SYMBOLS_VALUE = (
    "EJ[1:1an1ebJDsGEnhGd94K9XonLvMokD4HSiKT5xgagdlEw=:KLlxcpkMMUCk4X5aZpNGCG6jUqJoytU2:"
    "lAk6EmtaEovXAgw9LuNJYZCYk3DR5ri0KjP3tfNo87U2bguF44qW8hL0BXfuM5olFz0=]"
)

# "test", "pA55word1" and "pgsql://some-db"
KUBE_USERNAME = (
    "EJ[1:t33Bwgtq7Zghz1P0D+8ZMiSypiQye4q9DWLuxaOrLEU=:XJHmDeBhyT9aLjbuzuHyhQc4kCHki9A9:JNCzvxQwWDmOmtE0AQO/y2RSV2Y=]"
)
KUBE_PASSWORD = (
    "EJ[1:t33Bwgtq7Zghz1P0D+8ZMiSypiQye4q9DWLuxaOrLEU=:MrpO2Q3ByLTTZCdDXhNwowZvRuVg7c63:"
    "lEwnFAwPtrNXb/IKwqXej9V8MjumSSP5Rg==]"
)
KUBE_DATABASE_URL = (
    "EJ[1:t33Bwgtq7Zghz1P0D+8ZMiSypiQye4q9DWLuxaOrLEU=:0w+6gl3gXIOQohjqZnmih8ZLWPVffurJ:"
    "7U6ZEcttjrkS5sA73T/y/hESIaoxJUA320XqBoFWvw==]"
)


@pytest.fixture
def keydir(tmp_path):
    """A key directory holding the private key for PUB_KEY."""
    directory = tmp_path / "keys"
    directory.mkdir()
    (directory / PUB_KEY).write_text(PRIV_KEY)
    return directory


@pytest.fixture
def keypair():
    """A freshly generated key pair."""
    return KeyPair.generate()


@pytest.fixture
def write_secrets(tmp_path):
    """Write a JSON document to a secrets file and return its path."""

    def _write(data, name="secrets.ejson"):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def sample_tree():
    """A nested document exercising the ignore marker."""
    return {
        "_public_key": "anything",
        "environment": {
            "test": "value",
            "_a": {
                "b": "n",
                "_c": "c",
            },
        },
        "other": "key",
    }
