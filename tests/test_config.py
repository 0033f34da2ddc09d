"""Tests for backend configuration loading."""

import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from cloudnotes.config import load_outputs
from cloudnotes.exceptions import ConfigError

OUTPUTS = {
    "auth": {"url": "https://auth.example.com"},
    "data": {"url": "https://api.example.com/graphql", "model_name": "Notes"},
    "storage": {"url": "https://storage.example.com"},
}


class LoadOutputsTest(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "outputs.json")
        env = {k: v for k, v in os.environ.items() if not k.startswith("CLOUDNOTES_")}
        self.env = patch.dict(os.environ, env, clear=True)
        self.env.start()

    def tearDown(self):
        self.env.stop()
        shutil.rmtree(self.tmpdir)

    def _write(self, data):
        with open(self.path, "w", encoding="utf-8") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)

    def test_explicit_path(self):
        self._write(OUTPUTS)
        outputs = load_outputs(self.path)
        self.assertEqual(outputs.data.model_name, "Notes")
        self.assertEqual(outputs.storage.url_expires_in, 900)
        self.assertEqual(outputs.http.timeout, 30.0)

    def test_env_path_and_model_override(self):
        self._write(OUTPUTS)
        os.environ["CLOUDNOTES_OUTPUTS"] = self.path
        os.environ["CLOUDNOTES_MODEL_NAME"] = "Note"
        outputs = load_outputs()
        self.assertEqual(outputs.data.model_name, "Note")
        self.assertEqual(outputs.auth.url, "https://auth.example.com")

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_outputs(os.path.join(self.tmpdir, "absent.json"))

    def test_invalid_json(self):
        self._write("{broken")
        with self.assertRaises(ConfigError):
            load_outputs(self.path)

    def test_missing_section(self):
        self._write({"auth": OUTPUTS["auth"], "data": OUTPUTS["data"]})
        with self.assertRaises(ConfigError) as ctx:
            load_outputs(self.path)
        self.assertIsNotNone(ctx.exception.payload)

    def test_unknown_keys_are_ignored(self):
        self._write({**OUTPUTS, "version": "1.3", "custom": {}})
        self.assertEqual(load_outputs(self.path).data.url, OUTPUTS["data"]["url"])


if __name__ == "__main__":
    unittest.main()
