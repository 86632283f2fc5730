"""
Cosmic Garden - Flower Classifier
Turns a mood message into a flower species and a short caption using an
OpenAI-compatible chat completion endpoint.

Only bad input, provider rate limits and provider quota errors reach the
caller. Every other failure (no key, network, timeout, odd JSON, made-up
species) plants a random flower with the visitor's own words as caption.
"""
import json
import logging
import random
from typing import Any, Dict, Optional

import openai
from openai import OpenAI

from ... import config
from ..i18n import LocaleContext
from .errors import AIQuotaError, AIRateLimitError
from .models import FlowerClassification
from .taxonomy import SPECIES_IDS, is_known_species, map_to_visual_type
from .validation import resolve_author, sanitize_message

logger = logging.getLogger(__name__)

MAX_CAPTION_LENGTH = 100

MOOD_GUIDE = """- Love/romance: rose, tulip, peony, camellia, carnation
- Joy/happiness: sunflower, daisy, daffodil, gerbera, marigold
- Peace/calm: lavender, lotus, lily, water_lily, jasmine
- Hope/new beginnings: cherry_blossom, magnolia, snowdrop, primrose
- Strength/courage: poppy, iris, gladiolus, protea
- Elegance/beauty: orchid, phalaenopsis, chrysanthemum, hydrangea
- Passion: hibiscus, bougainvillea, bird_of_paradise
- Wildness/freedom: wildflower, cosmos, bluebell
- Purity: lily, gardenia, narcissus, magnolia
- Friendship: zinnia, freesia, acacia
- Memory/remembrance: forget_me_not, rosemary, statice
- Gratitude: hydrangea, bellflower, dahlia
- Wisdom: iris, salvia, delphinium
- Healing: echinacea, lavender
- Spring/renewal: tulip, crocus, hyacinth, daffodil
- Summer: sunflower, hibiscus, dahlia, zinnia
- Autumn: chrysanthemum, aster, marigold
- Winter: hellebore, camellia, snowdrop
- Asian themes: cherry_blossom, lotus, peony, osmanthus, plum_blossom
- European themes: rose, lavender, tulip, lilac
- Tropical themes: hibiscus, bird_of_paradise, orchid, passion_flower"""


def build_system_prompt() -> str:
    return (
        "You are a flower garden AI. Based on the user's message, mood, language, or emoji, "
        "determine the most suitable flower type from this comprehensive botanical list: "
        f"{', '.join(SPECIES_IDS)}\n\n"
        "Generate a beautiful short message (max 80 chars) in the SAME LANGUAGE as the user's input.\n\n"
        "Respond with ONLY valid JSON in this exact format:\n"
        '{"flowerType": "flower_name", "message": "beautiful message in user\'s language"}\n\n'
        "Match emotions and themes to flowers:\n"
        f"{MOOD_GUIDE}"
    )


SYSTEM_PROMPT = build_system_prompt()


def strip_code_fence(content: str) -> str:
    """Remove a ```json / ``` wrapper the model sometimes adds"""
    text = (content or "").strip()
    if text[:7].lower() == "```json":
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_completion(content: str) -> Optional[Dict[str, Any]]:
    """JSON object from a completion, or None when it isn't one"""
    try:
        parsed = json.loads(strip_code_fence(content))
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _error_code(error: Exception) -> Optional[str]:
    code = getattr(error, "code", None)
    if code:
        return str(code)
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict) and inner.get("code"):
            return str(inner["code"])
    return None


class FlowerClassifier:
    """Classification gateway between visitor input and the AI provider"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        client=None,
        rng: Optional[random.Random] = None,
    ):
        self.api_key = config.AI_API_KEY if api_key is None else api_key
        self.model = model or config.AI_MODEL
        self.timeout = timeout or config.AI_TIMEOUT
        self.temperature = config.AI_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or config.AI_MAX_TOKENS
        self.rng = rng or random.Random()

        if client is not None:
            self.client = client
        elif self.api_key:
            # Single attempt; any failure goes to the fallback flower
            self.client = OpenAI(
                api_key=self.api_key,
                base_url=base_url or config.AI_BASE_URL,
                timeout=self.timeout,
                max_retries=0,
            )
            logger.info(f"✅ Flower classifier using model {self.model}")
        else:
            self.client = None
            logger.warning("⚠️ No AI API key - flowers will be chosen at random")

    def is_available(self) -> bool:
        return self.client is not None

    def random_species(self) -> str:
        return self.rng.choice(SPECIES_IDS)

    def _fallback(self, message: str, author: str) -> FlowerClassification:
        species = self.random_species()
        return FlowerClassification(
            species=species,
            visual_type=map_to_visual_type(species),
            caption=message,
            author=author,
            source="fallback",
        )

    def _request_completion(self, message: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError, TypeError):
            return ""

    def classify(self, message: Any, author: Any = None, locale: Optional[LocaleContext] = None) -> FlowerClassification:
        """
        Classify a mood message.

        Raises:
            FlowerInputError: message missing, not a string, too long or empty
            AIRateLimitError: provider answered 429
            AIQuotaError: provider answered 402 / insufficient quota
        """
        clean_message = sanitize_message(message)
        locale = locale or LocaleContext()
        resolved_author = resolve_author(author, locale.text("anonymous"))

        if not self.is_available():
            return self._fallback(clean_message, resolved_author)

        try:
            content = self._request_completion(clean_message)
        except openai.RateLimitError as e:
            if _error_code(e) == "insufficient_quota":
                logger.error("AI provider quota exhausted")
                raise AIQuotaError("Payment required") from e
            logger.warning("AI provider rate limit exceeded")
            raise AIRateLimitError("Rate limit exceeded, please try again later") from e
        except openai.APIStatusError as e:
            if e.status_code == 402:
                logger.error("AI provider requires payment")
                raise AIQuotaError("Payment required") from e
            logger.error(f"AI provider error {e.status_code} - planting a random flower")
            return self._fallback(clean_message, resolved_author)
        except Exception as e:
            logger.error(f"AI provider call failed: {e} - planting a random flower")
            return self._fallback(clean_message, resolved_author)

        logger.debug(f"AI response: {content[:300]}")

        parsed = parse_completion(content)
        if parsed is None:
            logger.warning("Unparsable AI response - planting a random flower")
            return self._fallback(clean_message, resolved_author)

        species = parsed.get("flowerType")
        if not is_known_species(species):
            logger.warning(f"AI picked unknown species {species!r} - planting a random flower")
            return self._fallback(clean_message, resolved_author)

        caption = parsed.get("message")
        if isinstance(caption, str) and caption.strip():
            caption = caption.strip()[:MAX_CAPTION_LENGTH]
        else:
            caption = clean_message

        return FlowerClassification(
            species=species,
            visual_type=map_to_visual_type(species),
            caption=caption,
            author=resolved_author,
            source="ai",
        )

    def get_client_status(self) -> Dict[str, Any]:
        return {
            "client": "FlowerClassifier",
            "available": self.is_available(),
            "model": self.model,
            "timeout": self.timeout,
            "species_count": len(SPECIES_IDS),
        }
