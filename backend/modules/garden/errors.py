"""
Cosmic Garden - Garden Errors
Failures that reach the HTTP caller. Everything else degrades to a fallback
flower inside the classifier.
"""


class GardenError(Exception):
    """Base error carrying the HTTP status the routes answer with"""
    status_code = 500
    translation_key = "generic_error"

    def __init__(self, message: str = None, translation_key: str = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message
        if translation_key:
            self.translation_key = translation_key


class FlowerInputError(GardenError):
    """Message/author failed validation; never retried. Each raise names its own translation key"""
    status_code = 400
    translation_key = None


class AIRateLimitError(GardenError):
    """Provider answered 429"""
    status_code = 429
    translation_key = "rate_limited"


class AIQuotaError(GardenError):
    """Provider answered 402 / insufficient quota"""
    status_code = 402
    translation_key = "payment_required"


class PersistenceError(GardenError):
    """Flower could not be written to the store"""
    status_code = 500
    translation_key = "generic_error"
