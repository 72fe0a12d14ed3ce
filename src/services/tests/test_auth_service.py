"""Unit tests for auth_service module."""

import base64
import hashlib
import unittest
from unittest.mock import MagicMock
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from services.auth_service import PASSWORD_SALT, hash_password, login
from services.user_service import create_user, update_user
from adapter.fake.user_collection import FakeUserCollection
from domain.model.errors import InvalidArgumentError, StorageUnavailableError
from domain.model.user import AuthResult, Login, User


class TestHashPassword(unittest.TestCase):
    """Test hash_password function."""

    def test_deterministic(self):
        self.assertEqual(hash_password('secret'), hash_password('secret'))

    def test_different_inputs_differ(self):
        self.assertNotEqual(hash_password('secret'), hash_password('Secret'))

    def test_output_is_base64_of_32_bytes(self):
        raw = base64.b64decode(hash_password('secret'), validate=True)
        self.assertEqual(len(raw), 32)

    def test_matches_pbkdf2_sha256_parameters(self):
        expected = base64.b64encode(
            hashlib.pbkdf2_hmac('sha256', b'secret', PASSWORD_SALT, 100_000, 32)
        ).decode('ascii')
        self.assertEqual(hash_password('secret'), expected)

    def test_salt_is_16_bytes(self):
        self.assertEqual(len(PASSWORD_SALT), 16)

    def test_non_ascii_password(self):
        self.assertNotEqual(hash_password('pæssword'), hash_password('password'))


class TestLogin(unittest.TestCase):
    """Test login function."""

    def setUp(self):
        self.collection = FakeUserCollection()
        self.user = create_user(
            self.collection,
            User(first_name='A', email_address='a@b.com', password='secret'),
        )

    def test_end_to_end(self):
        """create → stored hash differs from plaintext → right password matches, wrong does not."""
        self.assertNotEqual(self.user.password, 'secret')

        self.assertEqual(
            login(self.collection, Login('a@b.com', 'secret')),
            AuthResult(matched=True, id=self.user.id),
        )
        self.assertEqual(
            login(self.collection, Login('a@b.com', 'wrong')),
            AuthResult(matched=False, id=''),
        )

    def test_unknown_email_looks_like_wrong_password(self):
        unknown = login(self.collection, Login('nobody@b.com', 'secret'))
        wrong = login(self.collection, Login('a@b.com', 'wrong'))
        self.assertEqual(unknown, wrong)

    def test_email_is_case_sensitive(self):
        self.assertFalse(login(self.collection, Login('A@B.com', 'secret')).matched)

    def test_user_without_password_never_matches(self):
        create_user(self.collection, User(email_address='nopw@b.com', password=None))
        self.assertFalse(login(self.collection, Login('nopw@b.com', '')).matched)

    def test_plaintext_written_by_update_no_longer_matches(self):
        """Update stores the password verbatim, so a plaintext one breaks login."""
        stored = self.collection.find_one({'id': self.user.id})
        stored.password = 'secret'
        update_user(self.collection, self.user.id, stored)

        self.assertFalse(login(self.collection, Login('a@b.com', 'secret')).matched)

    def test_missing_fields_raise(self):
        for credentials in (None, Login(None, 'secret'), Login('a@b.com', None)):
            with self.subTest(credentials=credentials):
                with self.assertRaises(InvalidArgumentError):
                    login(self.collection, credentials)

    def test_storage_error_propagates(self):
        collection = MagicMock()
        collection.find_one.side_effect = StorageUnavailableError("down", retryable=True)

        with self.assertRaises(StorageUnavailableError) as ctx:
            login(collection, Login('a@b.com', 'secret'))
        self.assertTrue(ctx.exception.retryable)


if __name__ == '__main__':
    unittest.main()
