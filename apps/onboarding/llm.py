"""
AI Field Normaliser
Rewrites a free-form answer the regex parsers rejected into the short
canonical form they accept ("fifty five" -> "55", "sugar pills" -> "tablets").
The regex parser always has the last word; this only proposes a candidate.
"""

import logging
from functools import lru_cache
from typing import Optional

from huggingface_hub import InferenceClient

from apps.onboarding.config import OnboardingConfig
from apps.onboarding.exceptions import AIParserError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You normalise answers from a diabetes patient registration chat.
The patient may write in English, Hindi, Kannada or Telugu, in any script.
You are told which question was asked. Rewrite the answer as the shortest
English form that answers it: a number, a 10 digit phone number, a 6 digit
pincode, yes/no, or the option word. Return ONLY that text. No explanation.
If the answer does not answer the question, return NONE."""

QUESTION_HINTS = {
    "language": "preferred language (english, hindi, kannada, telugu)",
    "name": "full name",
    "age": "age in years",
    "gender": "gender (male, female, other)",
    "emergency_contact": "emergency contact mobile number",
    "pincode": "area pincode",
    "consent": "consent to store health data (yes/no)",
    "diabetes_type": "diabetes type (type 1, type 2, gestational, other)",
    "duration": "years since diabetes diagnosis",
    "medication_type": "diabetes medication (tablets, insulin, both, none)",
    "medicine_names": "names of diabetes medicines",
    "diet": "diet (vegetarian, non-veg, eggetarian, vegan)",
    "comorbidities": "other health conditions",
    "hba1c": "last HbA1c percentage, or don't know",
}


class HFFieldNormaliser:
    """Thin wrapper over huggingface_hub.InferenceClient with a bounded timeout."""

    def __init__(self, model: str, token: str = '', timeout: float = 8, client=None):
        self.model = model
        self.client = client or InferenceClient(model=model, token=token or None, timeout=timeout)

    @classmethod
    def from_config(cls, config: OnboardingConfig) -> Optional["HFFieldNormaliser"]:
        """Shared per process: one InferenceClient per model, token and timeout."""
        if not config.ai_parser_enabled:
            return None
        return shared_normaliser(config.ai_parser_model, config.hf_token, config.ai_parser_timeout)

    def normalise(self, step: str, text: str) -> Optional[str]:
        """Candidate answer for `step`, or None when the model says it is not an answer."""
        question = QUESTION_HINTS.get(step, step)
        try:
            response = self.client.chat.completions.create(
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": f"Question: {question}\nAnswer: {text}"},
                ],
                temperature=0.0,
                max_tokens=40,
            )
            candidate = (response.choices[0].message.content or "").strip().strip('"').strip()
        except Exception as exc:
            raise AIParserError(f"Inference call failed for step {step!r}: {exc}") from exc

        if not candidate or candidate.upper() == "NONE":
            return None
        return candidate


@lru_cache(maxsize=None)
def shared_normaliser(model: str, token: str = '', timeout: float = 8) -> HFFieldNormaliser:
    return HFFieldNormaliser(model=model, token=token, timeout=timeout)
