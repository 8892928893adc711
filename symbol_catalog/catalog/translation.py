"""Batch translation of keyword lists into the display language.

The overlay never raises: a failed, slow, or misshapen batch leaves the
source keywords in place so the grid always has legible text.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import httpx

from symbol_catalog.errors import TranslationBatchError

logger = logging.getLogger("symbol_catalog.translation")

BATCH_TRANSLATE_PATH = "/batch-translate"


class Translator(Protocol):
    async def translate_batch(self, words: list[str], target_language: str) -> list[str]: ...


class HttpTranslator:
    """Client for the ``/batch-translate`` endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._own_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._own_client:
            await self._client.aclose()

    async def translate_batch(self, words: list[str], target_language: str) -> list[str]:
        payload = {"words": words, "target_language": target_language}
        headers = {"accept": "application/json", "Content-Type": "application/json"}
        try:
            resp = await self._client.post(BATCH_TRANSLATE_PATH, json=payload, headers=headers)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Translate HTTP %d: %s", exc.response.status_code, exc.response.text[:200]
            )
            raise TranslationBatchError(f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Translate request failed: %s", exc)
            raise TranslationBatchError(str(exc)) from exc
        except ValueError as exc:
            raise TranslationBatchError("invalid JSON in translate response") from exc

        translated = data.get("translated_words") if isinstance(data, dict) else None
        if not isinstance(translated, list):
            raise TranslationBatchError("translate response has no translated_words list")
        return translated


class TranslationOverlay:
    """Localize keyword lists with positional fallback to the source text."""

    def __init__(
        self,
        translator: Translator,
        source_language: str = "en",
        timeout: float | None = 30.0,
    ) -> None:
        self._translator = translator
        self.source_language = source_language
        self._timeout = timeout
        self._in_flight = 0

    @property
    def is_translating(self) -> bool:
        return self._in_flight > 0

    async def localize(self, keywords: list[str], target_language: str) -> list[str]:
        result = list(keywords)
        if not keywords or target_language == self.source_language:
            return result

        # Blank slots are not sent and keep their original value.
        positions = [i for i, kw in enumerate(keywords) if kw and kw.strip()]
        if not positions:
            return result
        words = [keywords[i] for i in positions]

        self._in_flight += 1
        try:
            translated = await asyncio.wait_for(
                self._translator.translate_batch(words, target_language),
                timeout=self._timeout,
            )
        except TranslationBatchError as exc:
            logger.warning("Batch translation to %s failed: %s", target_language, exc)
            return result
        except asyncio.TimeoutError:
            logger.warning(
                "Batch translation to %s timed out after %ss", target_language, self._timeout
            )
            return result
        except Exception:
            logger.exception("Unexpected translator failure for %s", target_language)
            return result
        finally:
            self._in_flight -= 1

        if not isinstance(translated, list) or len(translated) != len(words):
            logger.warning(
                "Translation length mismatch for %s: sent %d, got %s",
                target_language,
                len(words),
                len(translated) if isinstance(translated, list) else type(translated).__name__,
            )
            return result

        for position, text in zip(positions, translated):
            if isinstance(text, str) and text.strip():
                result[position] = text
        return result
