"""Tests for the object store clients."""

import asyncio
import unittest
from unittest.mock import MagicMock

from cloudnotes.exceptions import StorageAuthError, StorageError
from cloudnotes.services.storage import ImageStorage, ObjectStoreClient, make_image_key


def _response(status=200, json_data=None):
    resp = MagicMock()
    resp.status_code = status
    resp.text = ""
    resp.headers = {}
    if json_data is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = json_data
    return resp


class MakeImageKeyTest(unittest.TestCase):
    def test_key_uses_millis_and_filename(self):
        self.assertEqual(
            make_image_key("beach photo.png", 1700000000.5),
            "images/1700000000500-beach photo.png",
        )


class ObjectStoreClientTest(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.client = ObjectStoreClient("https://storage.example.com/", self.session)

    def test_put_object(self):
        self.session.request.return_value = _response()
        self.client.put_object("images/1-beach photo.png", b"data", "image/png")

        args, kwargs = self.session.request.call_args
        self.assertEqual(
            args,
            ("PUT", "https://storage.example.com/objects/images/1-beach%20photo.png"),
        )
        self.assertEqual(kwargs["data"], b"data")
        self.assertEqual(kwargs["headers"], {"Content-Type": "image/png"})

    def test_signed_url(self):
        self.session.request.return_value = _response(
            json_data={
                "url": "https://cdn.example.com/images/1.png?sig=x",
                "expiresAt": "2024-05-01T10:15:00Z",
            }
        )
        resp = self.client.signed_url("images/1.png", expires_in=60)

        self.assertEqual(resp.url, "https://cdn.example.com/images/1.png?sig=x")
        self.assertIsNotNone(resp.expires_at)
        args, kwargs = self.session.request.call_args
        self.assertEqual(
            args, ("POST", "https://storage.example.com/objects/images/1.png/signed-url")
        )
        self.assertEqual(kwargs["json"], {"expiresIn": 60})

    def test_signed_url_for_missing_key(self):
        self.session.request.return_value = _response(
            status=404, json_data={"message": "NoSuchKey"}
        )
        with self.assertRaises(StorageError) as ctx:
            self.client.signed_url("images/missing.png")
        self.assertEqual(ctx.exception.status_code, 404)

    def test_signed_url_validation_failure(self):
        self.session.request.return_value = _response(json_data={"nope": True})
        with self.assertRaises(StorageError):
            self.client.signed_url("images/1.png")

    def test_delete_object(self):
        self.session.request.return_value = _response(status=204)
        self.client.delete_object("images/1.png")
        args, _ = self.session.request.call_args
        self.assertEqual(
            args, ("DELETE", "https://storage.example.com/objects/images/1.png")
        )

    def test_forbidden(self):
        self.session.request.return_value = _response(status=403)
        with self.assertRaises(StorageAuthError):
            self.client.delete_object("images/1.png")


class ImageStorageTest(unittest.TestCase):
    def setUp(self):
        self.raw = MagicMock(spec=ObjectStoreClient)
        self.storage = ImageStorage(self.raw, url_expires_in=120)

    def test_get_signed_url_returns_url_string(self):
        self.raw.signed_url.return_value = MagicMock(url="https://cdn/x")
        url = asyncio.run(self.storage.get_signed_url("images/x.png"))
        self.assertEqual(url, "https://cdn/x")
        self.raw.signed_url.assert_called_once_with("images/x.png", expires_in=120)

    def test_upload_and_remove_delegate(self):
        asyncio.run(self.storage.upload("images/x.png", b"1", "image/png"))
        self.raw.put_object.assert_called_once_with("images/x.png", b"1", "image/png")
        asyncio.run(self.storage.remove("images/x.png"))
        self.raw.delete_object.assert_called_once_with("images/x.png")

    def test_errors_propagate(self):
        self.raw.delete_object.side_effect = StorageError("gone")
        with self.assertRaises(StorageError):
            asyncio.run(self.storage.remove("images/x.png"))


if __name__ == "__main__":
    unittest.main()
