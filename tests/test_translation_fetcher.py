"""Tests for TranslationFetcher error classification."""
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from physicshub.language import (
    MalformedPayload,
    NetworkUnavailable,
    ServerRejected,
    StringTable,
    TranslationFetcher,
)

URL = 'https://translations.example.test/api/translations'


def make_response(status_code=200, body=None, raw=None):
    response = MagicMock()
    response.status_code = status_code
    if raw is not None:
        response.json.side_effect = json.JSONDecodeError('Expecting value', raw, 0)
    else:
        response.json.return_value = body
    return response


def make_fetcher(response=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return TranslationFetcher(URL, session=session), session


class TestFetchRemote:

    def test_success_decodes_both_tables(self):
        fetcher, session = make_fetcher(make_response(body={
            'en': {'hello': 'Hello there,', 'back': 'Back'},
            'vn': {'hello': 'Chào bạn,'},
        }))

        translations, error = fetcher.fetch_remote()

        assert error is None
        assert translations.en['hello'] == 'Hello there,'
        assert translations.vn['hello'] == 'Chào bạn,'
        assert translations.vn['back'] == ''
        session.get.assert_called_once_with(URL, timeout=(10, 10))

    def test_partial_payload_is_valid(self):
        fetcher, _ = make_fetcher(make_response(body={'en': {'hello': 'Hi'}}))
        translations, error = fetcher.fetch_remote()
        assert error is None
        assert translations.vn == StringTable.empty()

    def test_empty_object_is_success(self):
        fetcher, _ = make_fetcher(make_response(body={}))
        translations, error = fetcher.fetch_remote()
        assert error is None
        assert translations.en == StringTable.empty()

    def test_unknown_keys_are_ignored(self):
        fetcher, _ = make_fetcher(make_response(body={
            'en': {'hello': 'Hi', 'brandNewKey': 'x'},
            'vn': {},
            'fr': {'hello': 'Salut'},
        }))
        translations, error = fetcher.fetch_remote()
        assert error is None
        assert 'brandNewKey' not in translations.en.to_dict()

    @pytest.mark.parametrize('status_code', [404, 500, 503])
    def test_non_200_is_server_rejected(self, status_code):
        fetcher, _ = make_fetcher(make_response(status_code=status_code))
        translations, error = fetcher.fetch_remote()
        assert translations is None
        assert isinstance(error, ServerRejected)
        assert error.status_code == status_code
        assert error.code == 'server_rejected'

    @pytest.mark.parametrize('exc', [
        requests.ConnectionError('connection refused'),
        requests.Timeout('read timed out'),
        requests.exceptions.InvalidURL('bad host'),
    ])
    def test_transport_failure_is_network_unavailable(self, exc):
        fetcher, _ = make_fetcher(error=exc)
        translations, error = fetcher.fetch_remote()
        assert translations is None
        assert isinstance(error, NetworkUnavailable)

    def test_non_json_body_is_malformed(self):
        fetcher, _ = make_fetcher(make_response(raw='<html>oops</html>'))
        translations, error = fetcher.fetch_remote()
        assert translations is None
        assert isinstance(error, MalformedPayload)

    @pytest.mark.parametrize('body', [
        ['en', 'vn'],
        'translations',
        {'en': 'Hello', 'vn': {}},
        {'en': {'hello': 12}, 'vn': {}},
    ])
    def test_wrong_shape_is_malformed(self, body):
        fetcher, _ = make_fetcher(make_response(body=body))
        translations, error = fetcher.fetch_remote()
        assert translations is None
        assert isinstance(error, MalformedPayload)
        assert error.code == 'malformed_payload'

    def test_custom_timeouts(self):
        session = MagicMock()
        session.get.return_value = make_response(body={})
        TranslationFetcher(URL, connect_timeout=3, read_timeout=7, session=session).fetch_remote()
        session.get.assert_called_once_with(URL, timeout=(3, 7))

    def test_defaults_to_requests_module(self):
        with patch('physicshub.language.fetcher.requests.get') as mock_get:
            mock_get.return_value = make_response(body={})
            _, error = TranslationFetcher(URL).fetch_remote()
        assert error is None
        mock_get.assert_called_once()
