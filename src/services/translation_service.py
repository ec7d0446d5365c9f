"""
Machine translation service (DeepL HTTP API)
"""

import aiohttp
import asyncio
import json
import logging
from typing import List, Optional, Tuple
from urllib.parse import urlencode

from config.settings import TranslatorSettings
from locales.placeholders import (
    PLACEHOLDER_TAG,
    decode_placeholders,
    encode_placeholders,
    encode_placeholders_fallback,
)
from utils.exceptions import (
    RetryableTranslationError,
    ResponseShapeError,
    TagHandlingError,
    TranslationError,
)
from utils.retry import call_with_retry

logger = logging.getLogger(__name__)

TAG_PARSE_FAILURE = 'tag handling parsing failed'

# Target languages the catalogs are translated into, keyed by primary subtag
DEEPL_TARGET_CODES = {
    'DE': 'DE',
    'ES': 'ES',
    'FR': 'FR',
    'IT': 'IT',
    'JA': 'JA',
    'KO': 'KO',
    'RU': 'RU',
    'ZH': 'ZH',
}


def _primary_subtag(locale_code: str) -> str:
    return locale_code.split('-')[0].upper()


def map_locale_to_deepl_target(locale_code: str) -> Optional[str]:
    """Map a locale code such as `de-DE` to a DeepL target, or None if unsupported"""
    return DEEPL_TARGET_CODES.get(_primary_subtag(locale_code))


def map_source_locale_to_deepl(locale_code: str) -> str:
    return _primary_subtag(locale_code) or 'EN'


def split_into_chunks(values: list, size: int) -> List[list]:
    return [values[index:index + size] for index in range(0, len(values), size)]


class TranslationService:
    """Batched DeepL translation with placeholder protection"""

    def __init__(self, settings: TranslatorSettings):
        if not settings.api_key:
            raise ValueError("DeepL API key is required")

        self.settings = settings
        self.api_url = settings.api_url
        self.headers = {
            'Authorization': self._build_auth_header(settings.api_key),
            'Content-Type': 'application/x-www-form-urlencoded'
        }
        # Switched off for the rest of the run once the service rejects the tags
        self.use_tag_handling = True
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

    def _build_auth_header(self, api_key: str) -> str:
        """Build authorization header"""
        if api_key.startswith('DeepL-Auth-Key '):
            return api_key
        return f'DeepL-Auth-Key {api_key}'

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session"""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                timeout = aiohttp.ClientTimeout(total=self.settings.timeout, connect=10)
                self._session = aiohttp.ClientSession(timeout=timeout)
            return self._session

    async def close(self):
        """Close HTTP session"""
        async with self._session_lock:
            if self._session and not self._session.closed:
                await self._session.close()
                self._session = None

    def build_payload(self, texts: List[str], source_lang: str, target_lang: str) -> List[Tuple[str, str]]:
        """
        Build the form fields of one translation request

        Args:
            texts: Source texts in catalog form ({name} placeholders)
            source_lang: DeepL source language
            target_lang: DeepL target language

        Returns:
            Ordered list of form fields; `text` repeats once per item
        """
        fields = [
            ('source_lang', source_lang),
            ('target_lang', target_lang),
            ('preserve_formatting', '1'),
            ('split_sentences', 'nonewlines'),
        ]
        if self.use_tag_handling:
            fields.append(('tag_handling', 'xml'))
            fields.append(('ignore_tags', PLACEHOLDER_TAG))

        encode = encode_placeholders if self.use_tag_handling else encode_placeholders_fallback
        fields.extend(('text', encode(text)) for text in texts)
        return fields

    async def _post_batch(self, texts: List[str], source_lang: str, target_lang: str) -> List[str]:
        """Issue one request and decode its translations"""
        session = await self._get_session()
        body = urlencode(self.build_payload(texts, source_lang, target_lang))

        try:
            async with session.post(self.api_url, data=body, headers=self.headers) as response:
                if response.status != 200:
                    error_body = await response.text()
                    self._raise_for_status(response.status, error_body)

                try:
                    data = await response.json(content_type=None)
                except (aiohttp.ContentTypeError, json.JSONDecodeError) as e:
                    raise ResponseShapeError(f"DeepL response is not JSON: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TranslationError(f"DeepL request failed: {e}") from e

        translations = data.get('translations') if isinstance(data, dict) else None
        if not isinstance(translations, list) or len(translations) != len(texts):
            raise ResponseShapeError("DeepL response shape mismatch.")

        return [decode_placeholders(self._entry_text(entry)) for entry in translations]

    @staticmethod
    def _entry_text(entry) -> str:
        text = entry.get('text') if isinstance(entry, dict) else None
        return '' if text is None else str(text)

    def _raise_for_status(self, status: int, body: str):
        message = f"DeepL request failed ({status}): {body[:500]}"
        if self.use_tag_handling and status == 400 and TAG_PARSE_FAILURE in body.lower():
            raise TagHandlingError(message, status, body)
        if status == 429 or status >= 500:
            raise RetryableTranslationError(message, status, body)
        raise TranslationError(message, status, body)

    async def _request_with_fallback(self, texts: List[str], source_lang: str, target_lang: str) -> List[str]:
        """One attempt; a tag parsing rejection is re-sent once with token encoding"""
        try:
            return await self._post_batch(texts, source_lang, target_lang)
        except TagHandlingError:
            logger.warning("DeepL rejected placeholder tags; switching to token encoding for the rest of the run")
            self.use_tag_handling = False
            return await self._post_batch(texts, source_lang, target_lang)

    async def translate_batch(self, texts: List[str], source_lang: str, target_lang: str) -> List[str]:
        """
        Translate one batch, retrying rate limits and server faults

        Returns:
            Translations aligned positionally with `texts`

        Raises:
            TranslationError: On any non-retryable failure or when attempts run out
        """
        if not texts:
            return []

        return await call_with_retry(
            self._request_with_fallback, texts, source_lang, target_lang,
            max_attempts=self.settings.max_attempts,
            delay=self.settings.base_delay,
            backoff_factor=2.0,
            exceptions=(RetryableTranslationError,)
        )

    async def translate_texts(
        self,
        texts: List[str],
        source_lang: str,
        target_lang: str,
        batch_size: Optional[int] = None
    ) -> List[str]:
        """Translate texts batch by batch, one request in flight at a time"""
        batch_size = batch_size or self.settings.batch_size
        results: List[str] = []
        for chunk in split_into_chunks(texts, batch_size):
            logger.debug(f"Translating batch of {len(chunk)} texts into {target_lang}")
            results.extend(await self.translate_batch(chunk, source_lang, target_lang))
        return results
