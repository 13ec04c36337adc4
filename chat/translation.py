"""Pluggable message translation.

The translator used by the translate endpoint is configured through the
``CHAT_TRANSLATOR`` setting (dotted path to a ``BaseTranslator`` subclass).
The shipped implementation echoes the original text.
"""

from django.conf import settings
from django.utils.module_loading import import_string


class TranslationError(Exception):
    """Raised by translators when a text cannot be translated."""


class BaseTranslator:
    def translate(self, text: str, source_language: str, target_language: str) -> str:
        raise NotImplementedError


class PassThroughTranslator(BaseTranslator):
    """Returns the text unchanged."""

    def translate(self, text, source_language, target_language):
        return text


def get_translator() -> BaseTranslator:
    return import_string(settings.CHAT_TRANSLATOR)()
