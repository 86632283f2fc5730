# Cosmic Garden - Localization Module
from .translations import (
    LANGUAGES,
    DEFAULT_LANGUAGE,
    LocaleContext,
    detect_language,
    get_translations,
    resolve_locale,
)

__all__ = [
    'LANGUAGES',
    'DEFAULT_LANGUAGE',
    'LocaleContext',
    'detect_language',
    'get_translations',
    'resolve_locale',
]
