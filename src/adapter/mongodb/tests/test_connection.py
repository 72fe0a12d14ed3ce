"""Tests for get_mongodb_client caching and failure handling."""

import unittest
from unittest.mock import patch, MagicMock

from pymongo.errors import ServerSelectionTimeoutError

from adapter.mongodb import connection
from adapter.mongodb.connection import get_mongodb_client, reset_client


class TestGetMongodbClient(unittest.TestCase):

    def setUp(self):
        reset_client()

    def tearDown(self):
        reset_client()

    @patch('adapter.mongodb.connection.MongoClient')
    def test_returns_client_when_ping_succeeds(self, mock_client_cls):
        client = get_mongodb_client()

        self.assertIs(client, mock_client_cls.return_value)
        client.admin.command.assert_called_with('ping')
        self.assertEqual(mock_client_cls.call_args[0][0], connection.MONGO_CONNECTION_STRING)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_caches_client(self, mock_client_cls):
        first = get_mongodb_client()
        second = get_mongodb_client()

        self.assertIs(first, second)
        mock_client_cls.assert_called_once()

    @patch('adapter.mongodb.connection.MongoClient')
    def test_connection_failure_returns_none_without_raising(self, mock_client_cls):
        mock_client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError("no servers")

        with self.assertLogs('adapter.mongodb.connection', level='ERROR'):
            self.assertIsNone(get_mongodb_client())

    @patch('adapter.mongodb.connection.MongoClient')
    def test_reconnects_after_cached_client_fails(self, mock_client_cls):
        stale = MagicMock()
        fresh = MagicMock()
        mock_client_cls.side_effect = [stale, fresh]

        self.assertIs(get_mongodb_client(), stale)
        stale.admin.command.side_effect = ServerSelectionTimeoutError("gone")

        self.assertIs(get_mongodb_client(), fresh)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_retries_after_initial_failure(self, mock_client_cls):
        broken = MagicMock()
        broken.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        working = MagicMock()
        mock_client_cls.side_effect = [broken, working]

        self.assertIsNone(get_mongodb_client())
        self.assertIs(get_mongodb_client(), working)


if __name__ == '__main__':
    unittest.main()
