"""
Tests for the external translation, image search and dictionary services.

HTTP sessions and the Google client are mocked; no network access.
"""

from unittest.mock import Mock, patch

import pytest
import requests
from google.api_core import exceptions as google_exceptions

from fib_study.config import Config
from fib_study.errors import (
    DictionaryNotFoundError,
    DictionaryServiceError,
    ImageSearchError,
    TranslationServiceError
)
from fib_study.lookup.dictionary_service import FreeDictionaryService
from fib_study.lookup.image_service import UnsplashImageService
from fib_study.lookup.translation_service import GoogleTranslationService


def http_response(status_code=200, payload=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


class TestGoogleTranslationService:

    def test_translates_english_to_vietnamese(self):
        client = Mock()
        client.translate.return_value = {'translatedText': 'xin chào', 'input': 'hello'}
        service = GoogleTranslationService(client=client)

        result = service.translate("hello")

        assert result.text == "xin chào"
        assert result.source == "hello"
        client.translate.assert_called_once_with(
            "hello", target_language="vi", source_language="en", format_='text'
        )

    def test_missing_translation_is_empty(self):
        client = Mock()
        client.translate.return_value = {}

        assert GoogleTranslationService(client=client).translate("hello").text == ""

    def test_api_error_raises(self):
        client = Mock()
        client.translate.side_effect = google_exceptions.Forbidden("quota")

        with pytest.raises(TranslationServiceError):
            GoogleTranslationService(client=client).translate("hello")

    @pytest.mark.parametrize("error", [
        requests.exceptions.ReadTimeout("timed out"),
        requests.exceptions.ConnectionError("connection reset"),
    ])
    def test_network_error_raises(self, error):
        client = Mock()
        client.translate.side_effect = error

        with pytest.raises(TranslationServiceError) as exc_info:
            GoogleTranslationService(client=client).translate("hello")

        assert exc_info.value.message == "Failed to translate text"

    def test_empty_text_rejected(self):
        client = Mock()

        with pytest.raises(TranslationServiceError):
            GoogleTranslationService(client=client).translate("  ")

        client.translate.assert_not_called()

    def test_missing_credentials(self):
        from google.auth.exceptions import DefaultCredentialsError

        with patch('fib_study.lookup.translation_service.default',
                   side_effect=DefaultCredentialsError("no credentials")):
            service = GoogleTranslationService()
            with pytest.raises(TranslationServiceError) as exc_info:
                service.translate("hello")

        assert exc_info.value.message == "Translation service is not configured"


class TestUnsplashImageService:

    def test_search_parameters_and_parsing(self):
        session = Mock()
        session.get.return_value = http_response(payload={
            'total': 1,
            'results': [{
                'urls': {'regular': 'https://images.example/cat.jpg'},
                'alt_description': 'a cat on a mat',
                'user': {'name': 'Ann', 'links': {'html': 'https://unsplash.com/@ann'}},
                'width': 4000,
                'height': 3000,
            }]
        })
        service = UnsplashImageService(access_key="key123", session=session)

        images = service.search("cat")

        assert len(images) == 1
        image = images[0]
        assert image.url == 'https://images.example/cat.jpg'
        assert image.alt == 'a cat on a mat'
        assert (image.credit_name, image.credit_link) == ('Ann', 'https://unsplash.com/@ann')
        assert (image.width, image.height) == (4000, 3000)

        _, kwargs = session.get.call_args
        assert kwargs['params'] == {
            'query': 'cat', 'per_page': 4, 'orientation': 'landscape', 'order_by': 'relevant'
        }
        assert kwargs['headers'] == {'Authorization': 'Client-ID key123'}
        assert kwargs['timeout'] == Config.HTTP_TIMEOUT

    def test_no_results(self):
        session = Mock()
        session.get.return_value = http_response(payload={'total': 0, 'results': []})

        assert UnsplashImageService(access_key="k", session=session).search("zzz") == []

    def test_http_error(self):
        session = Mock()
        session.get.return_value = http_response(status_code=500)

        with pytest.raises(ImageSearchError):
            UnsplashImageService(access_key="k", session=session).search("cat")

    def test_network_error(self):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("down")

        with pytest.raises(ImageSearchError):
            UnsplashImageService(access_key="k", session=session).search("cat")

    def test_non_object_payload(self):
        session = Mock()
        session.get.return_value = http_response(payload=[{"urls": {"regular": "u"}}])

        with pytest.raises(ImageSearchError) as exc_info:
            UnsplashImageService(access_key="k", session=session).search("cat")

        assert exc_info.value.message == "Failed to fetch images"

    def test_missing_access_key(self):
        session = Mock()

        with pytest.raises(ImageSearchError) as exc_info:
            UnsplashImageService(access_key="", session=session).search("cat")

        assert exc_info.value.message == "Image search is not configured"
        session.get.assert_not_called()


class TestFreeDictionaryService:

    def test_returns_entries(self):
        entries = [{'word': 'hello', 'meanings': [{'partOfSpeech': 'noun'}]}]
        session = Mock()
        session.get.return_value = http_response(payload=entries)
        service = FreeDictionaryService(session=session)

        assert service.lookup("hello") == entries
        url = session.get.call_args[0][0]
        assert url == f"{Config.DICTIONARY_API_URL}/hello"

    def test_word_is_url_quoted(self):
        session = Mock()
        session.get.return_value = http_response(payload=[])

        FreeDictionaryService(session=session).lookup("don't?")

        assert session.get.call_args[0][0].endswith("/don%27t%3F")

    def test_not_found(self):
        session = Mock()
        session.get.return_value = http_response(status_code=404, payload={'title': 'No Definitions Found'})

        with pytest.raises(DictionaryNotFoundError):
            FreeDictionaryService(session=session).lookup("zyzzx")

    def test_server_error(self):
        session = Mock()
        session.get.return_value = http_response(status_code=503)

        with pytest.raises(DictionaryServiceError) as exc_info:
            FreeDictionaryService(session=session).lookup("hello")

        assert not isinstance(exc_info.value, DictionaryNotFoundError)

    def test_unexpected_payload(self):
        session = Mock()
        session.get.return_value = http_response(payload={'message': 'odd'})

        with pytest.raises(DictionaryServiceError):
            FreeDictionaryService(session=session).lookup("hello")

    def test_network_error(self):
        session = Mock()
        session.get.side_effect = requests.Timeout("slow")

        with pytest.raises(DictionaryServiceError):
            FreeDictionaryService(session=session).lookup("hello")
