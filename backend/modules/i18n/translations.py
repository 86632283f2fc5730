"""
Cosmic Garden - Translations
User-facing copy for the ten supported languages.

Tables are read-only. A request resolves its language once into a
LocaleContext that services receive as an argument; there is no
process-wide "current language".
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "zh": "中文",
    "ja": "日本語",
    "ko": "한국어",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "pt": "Português",
    "ru": "Русский",
    "ar": "العربية",
}

LANGUAGES = tuple(LANGUAGE_NAMES.keys())

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "app_name": "Cosmic Garden",
        "anonymous": "Anonymous",
        "planted_flower": "Planted a beautiful",
        "thank_you_planting": "Thank you for adding beauty to the garden",
        "plant_failed": "Failed to plant flower. Please try again.",
        "rate_limited": "Rate limit exceeded, please try again later",
        "message_required": "Message must be a non-empty string",
        "message_too_long": "Message must be 200 characters or less",
        "message_empty": "Message cannot be empty",
        "payment_required": "Payment required",
        "generic_error": "Unable to process your request. Please try again later.",
        "error": "Error",
        "level_barren": "Barren Land",
        "level_sprouting": "Sprouting Garden",
        "level_early_spring": "Early Spring Garden",
        "level_blooming": "Blooming Garden",
        "level_wonderland": "Wonderland Garden",
        "level_paradise": "Paradise Garden",
    },
    "zh": {
        "app_name": "宇宙花园",
        "anonymous": "匿名",
        "planted_flower": "种下了美丽的",
        "thank_you_planting": "感谢您为花园增添美丽",
        "plant_failed": "种花失败，请重试。",
        "rate_limited": "请求过于频繁，请稍后再试",
        "message_required": "消息必须是非空字符串",
        "message_too_long": "消息不能超过200个字符",
        "message_empty": "消息不能为空",
        "payment_required": "需要付费",
        "generic_error": "暂时无法处理您的请求，请稍后再试。",
        "error": "错误",
        "level_barren": "荒芜之地",
        "level_sprouting": "萌芽花园",
        "level_early_spring": "初春花园",
        "level_blooming": "繁花花园",
        "level_wonderland": "仙境花园",
        "level_paradise": "天堂花园",
    },
    "ja": {
        "app_name": "コスミックガーデン",
        "anonymous": "匿名",
        "planted_flower": "美しい花を植えました",
        "thank_you_planting": "庭に美しさを加えてくれてありがとう",
        "plant_failed": "花を植えられませんでした。もう一度お試しください。",
        "rate_limited": "リクエストが多すぎます。しばらくしてからお試しください",
        "message_required": "メッセージは空でない文字列である必要があります",
        "message_too_long": "メッセージは200文字以内にしてください",
        "message_empty": "メッセージを空にすることはできません",
        "error": "エラー",
    },
    "ko": {
        "app_name": "코스믹 가든",
        "anonymous": "익명",
        "planted_flower": "아름다운 꽃을 심었습니다",
        "thank_you_planting": "정원에 아름다움을 더해주셔서 감사합니다",
        "plant_failed": "꽃을 심지 못했습니다. 다시 시도해 주세요.",
        "rate_limited": "요청이 너무 많습니다. 잠시 후 다시 시도해 주세요",
        "message_required": "메시지는 비어 있지 않은 문자열이어야 합니다",
        "message_too_long": "메시지는 200자 이하여야 합니다",
        "message_empty": "메시지는 비워 둘 수 없습니다",
        "error": "오류",
    },
    "es": {
        "app_name": "Jardín Cósmico",
        "anonymous": "Anónimo",
        "planted_flower": "Plantaste una hermosa",
        "thank_you_planting": "Gracias por añadir belleza al jardín",
        "plant_failed": "No se pudo plantar la flor. Inténtalo de nuevo.",
        "rate_limited": "Demasiadas solicitudes, inténtalo más tarde",
        "message_required": "El mensaje debe ser un texto no vacío",
        "message_too_long": "El mensaje debe tener 200 caracteres o menos",
        "message_empty": "El mensaje no puede estar vacío",
        "error": "Error",
    },
    "fr": {
        "app_name": "Jardin Cosmique",
        "anonymous": "Anonyme",
        "planted_flower": "Vous avez planté une belle",
        "thank_you_planting": "Merci d'ajouter de la beauté au jardin",
        "plant_failed": "Impossible de planter la fleur. Veuillez réessayer.",
        "rate_limited": "Trop de requêtes, veuillez réessayer plus tard",
        "message_required": "Le message doit être un texte non vide",
        "message_too_long": "Le message doit contenir 200 caractères au maximum",
        "message_empty": "Le message ne peut pas être vide",
        "error": "Erreur",
    },
    "de": {
        "app_name": "Kosmischer Garten",
        "anonymous": "Anonym",
        "planted_flower": "Du hast eine wunderschöne gepflanzt",
        "thank_you_planting": "Danke, dass du dem Garten Schönheit hinzufügst",
        "plant_failed": "Blume konnte nicht gepflanzt werden. Bitte versuche es erneut.",
        "rate_limited": "Zu viele Anfragen, bitte versuche es später erneut",
        "message_required": "Die Nachricht muss ein nicht leerer Text sein",
        "message_too_long": "Die Nachricht darf höchstens 200 Zeichen lang sein",
        "message_empty": "Die Nachricht darf nicht leer sein",
        "error": "Fehler",
    },
    "pt": {
        "app_name": "Jardim Cósmico",
        "anonymous": "Anônimo",
        "planted_flower": "Você plantou uma linda",
        "thank_you_planting": "Obrigado por adicionar beleza ao jardim",
        "plant_failed": "Não foi possível plantar a flor. Tente novamente.",
        "rate_limited": "Muitas solicitações, tente novamente mais tarde",
        "message_required": "A mensagem deve ser um texto não vazio",
        "message_too_long": "A mensagem deve ter no máximo 200 caracteres",
        "message_empty": "A mensagem não pode estar vazia",
        "error": "Erro",
    },
    "ru": {
        "app_name": "Космический Сад",
        "anonymous": "Аноним",
        "planted_flower": "Вы посадили прекрасный",
        "thank_you_planting": "Спасибо за добавление красоты в сад",
        "plant_failed": "Не удалось посадить цветок. Попробуйте ещё раз.",
        "rate_limited": "Слишком много запросов, попробуйте позже",
        "message_required": "Сообщение должно быть непустой строкой",
        "message_too_long": "Сообщение должно быть не длиннее 200 символов",
        "message_empty": "Сообщение не может быть пустым",
        "error": "Ошибка",
    },
    "ar": {
        "app_name": "الحديقة الكونية",
        "anonymous": "مجهول",
        "planted_flower": "زرعت زهرة جميلة",
        "thank_you_planting": "شكراً لإضافة الجمال إلى الحديقة",
        "plant_failed": "تعذر زراعة الزهرة. يرجى المحاولة مرة أخرى.",
        "rate_limited": "طلبات كثيرة جداً، يرجى المحاولة لاحقاً",
        "message_required": "يجب أن تكون الرسالة نصاً غير فارغ",
        "message_too_long": "يجب ألا تتجاوز الرسالة 200 حرف",
        "message_empty": "لا يمكن أن تكون الرسالة فارغة",
        "error": "خطأ",
    },
}


def get_translations(lang: Optional[str]) -> Dict[str, str]:
    """Full table for a language; keys it lacks come from English"""
    table = dict(TRANSLATIONS[DEFAULT_LANGUAGE])
    if lang in TRANSLATIONS and lang != DEFAULT_LANGUAGE:
        table.update(TRANSLATIONS[lang])
    return table


def detect_language(accept_language: Optional[str]) -> str:
    """
    Pick the best supported language from an Accept-Language header.

    Only the primary subtag is compared ("zh-CN" -> "zh"); q-values order
    the candidates, ties keep header order.
    """
    if not accept_language:
        return DEFAULT_LANGUAGE

    candidates = []
    for position, part in enumerate(accept_language.split(",")):
        pieces = part.strip().split(";")
        tag = pieces[0].strip().lower()
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in pieces[1:]:
            key, _, value = param.strip().partition("=")
            if key.strip() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        candidates.append((-quality, position, tag.split("-")[0]))

    for neg_quality, _, primary in sorted(candidates):
        if neg_quality < 0 and primary in TRANSLATIONS:
            return primary
    return DEFAULT_LANGUAGE


@dataclass(frozen=True)
class LocaleContext:
    """Active language plus its translation table"""
    language: str = DEFAULT_LANGUAGE
    t: Dict[str, str] = field(default_factory=lambda: get_translations(DEFAULT_LANGUAGE))

    @classmethod
    def for_language(cls, language: Optional[str]) -> "LocaleContext":
        lang = language if language in TRANSLATIONS else DEFAULT_LANGUAGE
        return cls(language=lang, t=get_translations(lang))

    def text(self, key: str) -> str:
        return self.t.get(key, key)


def resolve_locale(explicit: Optional[str] = None, accept_language: Optional[str] = None) -> LocaleContext:
    """Explicit ?lang= wins over the Accept-Language header"""
    if explicit:
        explicit = explicit.strip().lower()
        if explicit in TRANSLATIONS:
            return LocaleContext.for_language(explicit)
        logger.debug(f"Unsupported language requested: {explicit}")
    return LocaleContext.for_language(detect_language(accept_language))
