"""Tests for the cloudnotes CLI."""

import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from typer.testing import CliRunner

from cloudnotes.cli.main import app
from cloudnotes.models import Note
from fakes import FakeService


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def invoke(self, service, *args, **kwargs):
        with patch("cloudnotes.cli.utils.auth.get_service", return_value=service):
            return self.runner.invoke(app, list(args), **kwargs)


class NotesListTest(CliTestCase):
    def test_requires_login(self):
        service = FakeService(authenticated=False)
        result = self.invoke(service, "notes", "list")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Not logged in", result.output)
        self.assertEqual(service.calls, [])

    def test_empty_collection(self):
        result = self.invoke(FakeService(), "notes", "list")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No notes yet.", result.output)

    def test_lists_notes(self):
        service = FakeService(
            notes=[
                Note(id="1", name="Trip", description="Fun", image="images/1.png"),
                Note(id="2", name="Work"),
            ]
        )
        result = self.invoke(service, "notes", "list")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Trip", result.output)
        self.assertIn("Work", result.output)
        self.assertIn(("get_signed_url", "images/1.png"), service.calls)


class NotesCreateTest(CliTestCase):
    def test_create_note(self):
        service = FakeService()
        result = self.invoke(service, "notes", "create", "Trip", "-d", "Fun")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Created note", result.output)
        self.assertEqual(service.calls, [("create", "Trip", "Fun", None)])

    def test_blank_name_is_rejected(self):
        service = FakeService()
        result = self.invoke(service, "notes", "create", "   ")
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(service.calls, [])

    def test_create_with_image(self):
        path = os.path.join(self.tmpdir, "beach.png")
        with open(path, "wb") as f:
            f.write(b"\x89PNG")
        service = FakeService()
        result = self.invoke(service, "notes", "create", "Trip", "--image", path)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(service.calls[0][0], "upload")
        self.assertEqual(service.calls[0][2], "image/png")
        self.assertEqual(service.calls[1][0], "create")
        self.assertTrue(service.calls[1][3].endswith("-beach.png"))

    def test_non_image_file_is_rejected(self):
        path = os.path.join(self.tmpdir, "notes.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write("text")
        service = FakeService()
        result = self.invoke(service, "notes", "create", "Trip", "--image", path)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("not an image", result.output)
        self.assertEqual(service.calls, [])

    def test_backend_failure_exits_nonzero(self):
        service = FakeService()
        service.records.fail_create = True
        result = self.invoke(service, "notes", "create", "Trip")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Could not create note", result.output)


class NotesDeleteTest(CliTestCase):
    def test_delete_note(self):
        service = FakeService(notes=[Note(id="1", name="Trip", image="images/1.png")])
        result = self.invoke(service, "notes", "delete", "1", "--force")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Deleted note", result.output)
        self.assertIn(("delete", "1"), service.calls)
        self.assertIn(("remove", "images/1.png"), service.calls)

    def test_unknown_note(self):
        service = FakeService(notes=[Note(id="1", name="Trip")])
        result = self.invoke(service, "notes", "delete", "nope", "--force")
        self.assertEqual(result.exit_code, 1)
        self.assertNotIn("delete", [c[0] for c in service.calls])

    def test_cancelled(self):
        service = FakeService(notes=[Note(id="1", name="Trip")])
        result = self.invoke(service, "notes", "delete", "1", input="n\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Deletion cancelled", result.output)
        self.assertEqual(service.calls, [])


class AuthStatusTest(CliTestCase):
    def test_logged_in(self):
        result = self.invoke(FakeService(), "auth", "status")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("alice", result.output)

    def test_not_logged_in(self):
        result = self.invoke(FakeService(authenticated=False), "auth", "status")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Not logged in", result.output)


if __name__ == "__main__":
    unittest.main()
