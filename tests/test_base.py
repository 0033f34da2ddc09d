"""Tests for the CloudNotesService facade."""

import shutil
import tempfile
import unittest
from unittest.mock import MagicMock

from cloudnotes import CloudNotesService, NoteOrchestrator
from cloudnotes.config import BackendOutputs
from cloudnotes.exceptions import NotAuthenticatedError

OUTPUTS = BackendOutputs.model_validate(
    {
        "auth": {"url": "https://auth.example.com"},
        "data": {"url": "https://api.example.com/graphql", "model_name": "Note"},
        "storage": {"url": "https://storage.example.com", "url_expires_in": 60},
    }
)


class CloudNotesServiceTest(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.session = MagicMock()
        self.session.headers = {}
        self.api = CloudNotesService(
            OUTPUTS, session_dir=self.tmpdir, session=self.session
        )

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_notes_require_a_session(self):
        self.assertFalse(self.api.auth.is_authenticated)
        with self.assertRaises(NotAuthenticatedError):
            self.api.notes
        self.assertIn("not signed in", repr(self.api))

    def test_signed_in_service_exposes_orchestrator(self):
        response = MagicMock(status_code=200)
        response.json.return_value = {"accessToken": "tok", "expiresIn": 3600}
        self.session.request.return_value = response

        self.api.auth.sign_in("alice", "secret")

        self.assertIsInstance(self.api.notes, NoteOrchestrator)
        self.assertIs(self.api.notes, self.api.notes)
        self.assertEqual(self.api.account_name, "alice")
        self.assertEqual(self.api.records.raw.model_name, "Note")
        self.assertEqual(self.session.headers["Authorization"], "Bearer tok")

    def test_session_is_restored_on_startup(self):
        response = MagicMock(status_code=200)
        response.json.return_value = {"accessToken": "tok", "expiresIn": 3600}
        self.session.request.return_value = response
        self.api.auth.sign_in("alice", "secret")

        restored = CloudNotesService(
            OUTPUTS, session_dir=self.tmpdir, session=MagicMock(headers={})
        )
        self.assertTrue(restored.auth.is_authenticated)
        self.assertEqual(restored.account_name, "alice")


if __name__ == "__main__":
    unittest.main()
