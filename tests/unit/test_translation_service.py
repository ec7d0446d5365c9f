"""
Unit tests for the DeepL translation service
"""

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qsl

from config.settings import TranslatorSettings, DEEPL_FREE_URL, DEEPL_PRO_URL
from services.translation_service import (
    TranslationService,
    map_locale_to_deepl_target,
    map_source_locale_to_deepl,
    split_into_chunks,
)
from utils.exceptions import (
    ResponseShapeError,
    RetryableTranslationError,
    TranslationError,
)

from conftest import make_response, make_session, translations_json


def posted_fields(session, call_index: int = 0):
    """Decode the form body of one recorded post() call"""
    return parse_qsl(session.post.call_args_list[call_index].kwargs["data"])


class TestLanguageMapping:
    def test_supported_targets(self):
        assert map_locale_to_deepl_target("de-DE") == "DE"
        assert map_locale_to_deepl_target("zh-CN") == "ZH"
        assert map_locale_to_deepl_target("ja") == "JA"

    def test_unsupported_target(self):
        assert map_locale_to_deepl_target("pt-BR") is None
        assert map_locale_to_deepl_target("en-GB") is None

    def test_source_language(self):
        assert map_source_locale_to_deepl("en-US") == "EN"
        assert map_source_locale_to_deepl("") == "EN"

    def test_split_into_chunks(self):
        assert split_into_chunks([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
        assert split_into_chunks([], 3) == []


class TestTranslationService:
    """Test cases for TranslationService"""

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            TranslationService(TranslatorSettings())

    def test_api_url_inferred_from_key(self):
        assert TranslatorSettings(api_key="abc:fx").api_url == DEEPL_FREE_URL
        assert TranslatorSettings(api_key="abc").api_url == DEEPL_PRO_URL
        assert TranslatorSettings(api_key="abc:fx", api_url="http://localhost/v2").api_url == "http://localhost/v2"

    def test_build_auth_header(self, translation_service: TranslationService):
        assert translation_service._build_auth_header("key") == "DeepL-Auth-Key key"
        assert translation_service._build_auth_header("DeepL-Auth-Key key") == "DeepL-Auth-Key key"
        assert translation_service.headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_build_payload_with_tag_handling(self, translation_service: TranslationService):
        payload = translation_service.build_payload(["Hi {name}", "Bye"], "EN", "DE")

        assert payload == [
            ("source_lang", "EN"),
            ("target_lang", "DE"),
            ("preserve_formatting", "1"),
            ("split_sentences", "nonewlines"),
            ("tag_handling", "xml"),
            ("ignore_tags", "ph"),
            ("text", 'Hi <ph id="name"/>'),
            ("text", "Bye"),
        ]

    def test_build_payload_without_tag_handling(self, translation_service: TranslationService):
        translation_service.use_tag_handling = False

        payload = dict(translation_service.build_payload(["Hi {name}"], "EN", "FR"))

        assert "tag_handling" not in payload
        assert "ignore_tags" not in payload
        assert payload["text"] == "Hi __DEEPL_PH_name__"

    @pytest.mark.asyncio
    async def test_translate_batch_success(self, translation_service: TranslationService):
        session = make_session(make_response(200, translations_json('Hallo <ph id="name"/>', "Tschüss")))

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session):
            result = await translation_service.translate_batch(["Hello {name}", "Bye"], "EN", "DE")

        assert result == ["Hallo {name}", "Tschüss"]
        assert session.post.call_args.args[0] == DEEPL_FREE_URL
        assert session.post.call_args.kwargs["headers"]["Authorization"] == "DeepL-Auth-Key test_deepl_key:fx"
        texts = [value for name, value in posted_fields(session) if name == "text"]
        assert texts == ['Hello <ph id="name"/>', "Bye"]

    @pytest.mark.asyncio
    async def test_rate_limit_retried_once(self, translation_service: TranslationService):
        session = make_session(
            make_response(429, text="Too many requests"),
            make_response(200, translations_json("Eins", "Zwei", "Drei")),
        )

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session), \
             patch('utils.retry.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            result = await translation_service.translate_batch(["One", "Two", "Three"], "EN", "DE")

        assert result == ["Eins", "Zwei", "Drei"]
        assert session.post.call_count == 2
        mock_sleep.assert_awaited_once_with(0.4)

    @pytest.mark.asyncio
    async def test_server_errors_exhaust_attempts(self, translation_service: TranslationService):
        session = make_session(
            make_response(503, text="busy"),
            make_response(502, text="bad gateway"),
            make_response(500, text="boom"),
        )

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session), \
             patch('utils.retry.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(RetryableTranslationError) as exc_info:
                await translation_service.translate_batch(["One"], "EN", "DE")

        assert exc_info.value.status == 500
        assert session.post.call_count == 3
        assert [call.args[0] for call in mock_sleep.await_args_list] == [0.4, 0.8]

    @pytest.mark.asyncio
    async def test_tag_handling_downgrade(self, translation_service: TranslationService):
        session = make_session(
            make_response(400, text='{"message":"Tag handling parsing failed"}'),
            make_response(200, translations_json("Hallo __DEEPL_PH_name__")),
        )

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session), \
             patch('utils.retry.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            result = await translation_service.translate_batch(["Hello {name}"], "EN", "DE")

        assert result == ["Hallo {name}"]
        assert translation_service.use_tag_handling is False
        mock_sleep.assert_not_awaited()

        retried = dict(posted_fields(session, 1))
        assert "tag_handling" not in retried
        assert retried["text"] == "Hello __DEEPL_PH_name__"

    @pytest.mark.asyncio
    async def test_downgrade_persists_for_later_batches(self, translation_service: TranslationService):
        session = make_session(
            make_response(400, text="Tag handling parsing failed"),
            make_response(200, translations_json("A")),
            make_response(200, translations_json("B")),
        )

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session):
            result = await translation_service.translate_texts(["a", "b"], "EN", "FR", batch_size=1)

        assert result == ["A", "B"]
        assert "tag_handling" not in dict(posted_fields(session, 2))

    @pytest.mark.asyncio
    async def test_plain_bad_request_is_fatal(self, translation_service: TranslationService):
        session = make_session(make_response(400, text="Value for 'target_lang' not supported."))

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session):
            with pytest.raises(TranslationError) as exc_info:
                await translation_service.translate_batch(["One"], "EN", "DE")

        assert not isinstance(exc_info.value, RetryableTranslationError)
        assert translation_service.use_tag_handling is True

    @pytest.mark.asyncio
    async def test_forbidden_is_fatal(self, translation_service: TranslationService):
        session = make_session(make_response(403, text="x" * 2000))

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session), \
             patch('utils.retry.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(TranslationError) as exc_info:
                await translation_service.translate_batch(["One"], "EN", "DE")

        assert exc_info.value.status == 403
        assert len(exc_info.value.body) == 500
        assert "(403)" in str(exc_info.value)
        assert session.post.call_count == 1
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_shape_mismatch_is_fatal(self, translation_service: TranslationService):
        session = make_session(make_response(200, translations_json("Eins")))

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session):
            with pytest.raises(ResponseShapeError, match="shape mismatch"):
                await translation_service.translate_batch(["One", "Two"], "EN", "DE")

        assert session.post.call_count == 1

    @pytest.mark.asyncio
    async def test_missing_text_becomes_empty_string(self, translation_service: TranslationService):
        session = make_session(make_response(200, {"translations": [{"text": None}, {"text": 5}]}))

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session):
            result = await translation_service.translate_batch(["One", "Two"], "EN", "DE")

        assert result == ["", "5"]

    @pytest.mark.asyncio
    async def test_network_error_is_fatal(self, translation_service: TranslationService):
        session = make_session()
        session.post = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session):
            with pytest.raises(TranslationError, match="refused"):
                await translation_service.translate_batch(["One"], "EN", "DE")

    @pytest.mark.asyncio
    async def test_translate_texts_batches_in_order(self, translation_service: TranslationService):
        session = make_session(
            make_response(200, translations_json("1", "2")),
            make_response(200, translations_json("3")),
        )

        with patch.object(translation_service, '_get_session', new_callable=AsyncMock, return_value=session):
            result = await translation_service.translate_texts(["a", "b", "c"], "EN", "DE", batch_size=2)

        assert result == ["1", "2", "3"]
        assert session.post.call_count == 2

    @pytest.mark.asyncio
    async def test_empty_batch_makes_no_request(self, translation_service: TranslationService):
        with patch.object(translation_service, '_get_session', new_callable=AsyncMock) as mock_session:
            assert await translation_service.translate_batch([], "EN", "DE") == []
            mock_session.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_session(self, translation_service: TranslationService):
        """Test closing HTTP session"""
        mock_session = AsyncMock()
        mock_session.closed = False
        translation_service._session = mock_session

        await translation_service.close()

        mock_session.close.assert_awaited_once()
        assert translation_service._session is None
