"""Tests for document.py module."""

import json

import pytest
from conftest import PUB_KEY

from rejson.crypto.keys import Key
from rejson.document import SecretsFile, transform
from rejson.exceptions import MissingPublicKeyError, SecretsFileError


def mark(value):
    return f"{value}!"


class TestTransform:
    """Tests for the recursive tree transform."""

    def test_transform(self, sample_tree):
        """Test only eligible string values are transformed."""
        transform(sample_tree, lambda _: "Encrypted")

        assert sample_tree == {
            "_public_key": "anything",
            "environment": {
                "test": "Encrypted",
                "_a": {
                    "b": "Encrypted",
                    "_c": "c",
                },
            },
            "other": "Encrypted",
        }

    def test_ignored_key_children_are_transformed(self):
        """Test objects under ignore-marked keys are still recursed into."""
        tree = {"_skip": {"leaf": "a", "_leaf": "b", "deeper": {"value": "c"}}, "show": "d"}

        transform(tree, mark)

        assert tree == {"_skip": {"leaf": "a!", "_leaf": "b", "deeper": {"value": "c!"}}, "show": "d!"}

    def test_non_string_values_untouched(self):
        """Test numbers, booleans, nulls and arrays are left alone."""
        tree = {"int": 1, "float": 1.5, "bool": True, "null": None, "list": ["a", {"b": "c"}]}

        transform(tree, mark)

        assert tree == {"int": 1, "float": 1.5, "bool": True, "null": None, "list": ["a", {"b": "c"}]}

    def test_key_order_preserved(self):
        """Test transformed documents keep their key order."""
        tree = {"z": "1", "a": "2", "m": {"y": "3", "b": "4"}}

        transform(tree, mark)

        assert list(tree) == ["z", "a", "m"]
        assert list(tree["m"]) == ["y", "b"]

    def test_failure_stops_the_walk(self):
        """Test an exception from the transformer propagates immediately."""
        seen = []

        def failing(value):
            seen.append(value)
            if value == "bad":
                raise ValueError("boom")
            return value

        with pytest.raises(ValueError, match="boom"):
            transform({"a": "ok", "b": "bad", "c": "never"}, failing)

        assert seen == ["ok", "bad"]


class TestSecretsFile:
    """Tests for SecretsFile."""

    def test_loads(self):
        """Test a JSON object parses."""
        data = {"_public_key": "anything", "environment": {"test": "value"}, "other": "key"}
        assert SecretsFile.loads(json.dumps(data)).value == data

    @pytest.mark.parametrize("text", ["{", "[]", '"string"'], ids=["malformed", "array", "string"])
    def test_loads_invalid(self, text):
        """Test malformed JSON and non-object documents are rejected."""
        with pytest.raises(SecretsFileError):
            SecretsFile.loads(text)

    def test_load_missing_file(self, tmp_path):
        """Test a missing file raises SecretsFileError."""
        with pytest.raises(SecretsFileError, match="does not exist"):
            SecretsFile.load(tmp_path / "missing.ejson")

    def test_public_key(self):
        """Test the declared public key is parsed."""
        assert SecretsFile({"_public_key": PUB_KEY}).public_key() == Key.from_hex(PUB_KEY)

    @pytest.mark.parametrize(
        "value",
        [{}, {"_public_key": "nope"}, {"_public_key": 42}],
        ids=["not-found", "bad-value", "not-a-string"],
    )
    def test_public_key_missing(self, value):
        """Test absent or invalid public keys raise MissingPublicKeyError."""
        with pytest.raises(MissingPublicKeyError):
            SecretsFile(value).public_key()

    def test_transform_method(self, sample_tree):
        """Test SecretsFile.transform walks the whole document."""
        secrets_file = SecretsFile(sample_tree)

        secrets_file.transform(mark)

        assert secrets_file.value["other"] == "key!"
        assert secrets_file.value["environment"]["_a"]["b"] == "n!"

    def test_children(self):
        """Test only the direct string children are returned."""
        secrets_file = SecretsFile(
            {
                "_public_key": "anything",
                "environment": {"test": "value", "_a": {"b": "n"}, "number": 1, "other": "thing"},
                "other": "key",
            }
        )

        assert secrets_file.children("environment") == {"test": "value", "other": "thing"}
        assert secrets_file.children("wat") is None
        assert secrets_file.children("other") is None

    def test_without_public_key(self, sample_tree):
        """Test the copy drops _public_key and leaves the original intact."""
        secrets_file = SecretsFile(sample_tree)

        stripped = secrets_file.without_public_key()

        assert "_public_key" not in stripped.value
        assert "_public_key" in secrets_file.value
        assert stripped.value["environment"] == secrets_file.value["environment"]

    def test_dumps(self):
        """Test documents pretty-print with two space indentation and no trailing newline."""
        secrets_file = SecretsFile({"a": {"b": "ü"}})

        assert secrets_file.dumps() == '{\n  "a": {\n    "b": "ü"\n  }\n}'
        assert str(secrets_file) == secrets_file.dumps()

    def test_save(self, tmp_path):
        """Test saving returns the number of bytes written."""
        path = tmp_path / "out.ejson"
        secrets_file = SecretsFile({"key": "välue"})

        written = secrets_file.save(path)

        assert written == len(path.read_bytes())
        assert SecretsFile.load(path).value == {"key": "välue"}
