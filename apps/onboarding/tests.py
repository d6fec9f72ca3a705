"""
Onboarding Tests
Parsers, transition table, prompt catalog, stores and the orchestrator
"""

from types import SimpleNamespace
from unittest import mock

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.db import OperationalError
from django.urls import reverse
from rest_framework import status

from apps.onboarding import parsers
from apps.onboarding.config import OnboardingConfig
from apps.onboarding.exceptions import AIParserError, StoreUnavailableError, UnknownStepError
from apps.onboarding.llm import HFFieldNormaliser, shared_normaliser
from apps.onboarding.models import OnboardingSession
from apps.onboarding.orchestrator import OnboardingOrchestrator
from apps.onboarding.prompts import PROMPT_TEXTS, PromptKey, get_prompt, welcome_prompt
from apps.onboarding.steps import (
    STEP_DEFINITIONS, STEP_ORDER, TOTAL_STEPS, OnboardingStep,
    resolve_next_step, skipped_fields, step_number,
)
from apps.onboarding.stores import SessionStore
from apps.patients.models import PatientProfile
from apps.patients.stores import PROFILE_FIELDS, ProfileStore

USER = "+919800000001"

# Greeting turn first, then one valid answer per step
ENGLISH_ANSWERS = [
    "1", "Ramesh Kumar", "55", "1", "9876543210", "560001", "yes",
    "2", "5 years", "1", "Glycomet 500", "veg", "BP", "7.2",
]


def drive(orchestrator, user_id, answers):
    replies = [orchestrator.handle(user_id, "hi")]
    for answer in answers:
        replies.append(orchestrator.handle(user_id, answer))
    return replies


def drive_to(orchestrator, user_id, step):
    """Answer canonically until the session waits at `step`."""
    orchestrator.handle(user_id, "hi")
    for answer in ENGLISH_ANSWERS:
        if OnboardingSession.objects.get(user_id=user_id).current_step == step.value:
            return
        orchestrator.handle(user_id, answer)
    raise AssertionError(f"never reached {step}")


class FakeNormaliser:
    def __init__(self, candidate=None, error=None):
        self.candidate = candidate
        self.error = error
        self.calls = []

    def normalise(self, step, text):
        self.calls.append((step, text))
        if self.error:
            raise self.error
        return self.candidate


# ============================================================================
# PARSERS
# ============================================================================

class TestChoiceParsers:
    """Menu numbers and keywords for enumerated fields"""

    @pytest.mark.parametrize("text,expected", [
        ("1", "en"), ("2", "hi"), ("3", "kn"), ("4", "te"),
        ("English", "en"), ("hindi", "hi"), ("हिंदी", "hi"), ("ಕನ್ನಡ", "kn"), ("తెలుగు", "te"),
        ("5", None), ("french", None), ("", None),
    ])
    def test_language(self, text, expected):
        assert parsers.parse_language(text) == expected

    def test_language_menu_follows_configured_order(self):
        assert parsers.parse_language("1", languages=("hi", "en")) == "hi"
        assert parsers.parse_language("3", languages=("hi", "en")) is None
        assert parsers.parse_language("telugu", languages=("hi", "en")) is None

    @pytest.mark.parametrize("text,expected", [
        ("switch to Hindi", "hi"), ("ಕನ್ನಡ ದಯವಿಟ್ಟು", "kn"), ("English please", "en"),
        ("2", None), ("thanks", None), ("", None),
    ])
    def test_language_change(self, text, expected):
        assert parsers.parse_language_change(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("1", "male"), ("2", "female"), ("3", "other"),
        ("Male", "male"), ("female", "female"), ("महिला", "female"), ("ಪುರುಷ", "male"),
        ("prefer not to say", "other"), ("I'm other", "other"), ("I'm transgender", "other"),
        ("m", "male"), ("F", "female"), ("xyz", None),
    ])
    def test_gender(self, text, expected):
        assert parsers.parse_gender(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("yes", True), ("1", True), ("I agree", True), ("ok", True),
        ("हाँ", True), ("ಹೌದು", True), ("అవును", True),
        ("no", False), ("2", False), ("I do not agree", False), ("नहीं", False), ("లేదు", False),
        ("yes, no problem", True), ("ok no issues", True), ("no, I don't want to", False),
        ("मैं सहमत नहीं हूँ", False), ("maybe", None),
    ])
    def test_consent(self, text, expected):
        assert parsers.parse_consent(text) is expected

    @pytest.mark.parametrize("text,expected", [
        ("2", "type_2"), ("type 1", "type_1"), ("T2", "type_2"), ("Type II", "type_2"),
        ("gestational", "gestational"), ("not sure", "other"), ("टाइप 2", "type_2"), ("5", None),
    ])
    def test_diabetes_type(self, text, expected):
        assert parsers.parse_diabetes_type(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("1", "tablets"), ("4", "none"), ("insulin", "insulin"), ("both", "both"),
        ("tablets and insulin", "both"), ("none", "none"), ("no", "none"),
        ("गोली", "tablets"), ("metformin tablets", "tablets"), ("xyz", None),
        ("only insulin, no tablets", "insulin"), ("not taking insulin, only tablets", "tablets"),
        ("गोली नहीं, सिर्फ इंसुलिन", "insulin"), ("no tablets", "none"),
    ])
    def test_medication_type(self, text, expected):
        assert parsers.parse_medication_type(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("1", "vegetarian"), ("non veg", "non_vegetarian"), ("Non-Vegetarian", "non_vegetarian"),
        ("veg", "vegetarian"), ("eggetarian", "eggetarian"), ("vegan", "vegan"),
        ("शाकाहारी", "vegetarian"), ("pizza", None),
    ])
    def test_diet(self, text, expected):
        assert parsers.parse_diet(text) == expected


class TestValueParsers:
    """Free-form values: names, numbers, phone and pincode"""

    def test_name(self):
        assert parsers.parse_name("  Ramesh   Kumar ") == "Ramesh Kumar"
        assert parsers.parse_name("रमेश कुमार") == "रमेश कुमार"

    @pytest.mark.parametrize("text", ["12345", "A", "x" * 101, "", "R2D2", "   "])
    def test_name_rejected(self, text):
        assert parsers.parse_name(text) is None

    @pytest.mark.parametrize("text,expected", [
        ("55", 55), ("I am 42 years old", 42), ("120", 120),
        ("200", None), ("0", None), ("abc", None),
    ])
    def test_age(self, text, expected):
        assert parsers.parse_age(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("9876543210", "+919876543210"),
        ("+91 98765-43210", "+919876543210"),
        ("(987) 654-3210", "+919876543210"),
        ("919876543210", "+919876543210"),
        ("1234567890", None),
        ("98765", None),
        ("+15551234567", None),
    ])
    def test_phone(self, text, expected):
        assert parsers.parse_phone(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("560001", "560001"), ("my pincode is 500032", "500032"),
        ("5600011", None), ("56000", None),
    ])
    def test_pincode(self, text, expected):
        assert parsers.parse_pincode(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("5", 5.0), ("5 years", 5.0), ("2.5", 2.5), ("6 months", 0.5), ("18 months", 1.5),
        ("just diagnosed", 0.0), ("new", 0.0), ("3 साल", 3.0),
        ("5 years 6 months", 5.5), ("2 years and 6 months", 2.5), ("6 महीने", 0.5),
        ("150", None), ("abc", None),
    ])
    def test_duration(self, text, expected):
        assert parsers.parse_duration(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("7.2", 7.2), ("7.2%", 7.2), ("HbA1c 8", 8.0),
        ("don't know", "unknown"), ("पता नहीं", "unknown"), ("తెలియదు", "unknown"),
        ("25", None), ("100", None), ("2", None), ("abc", None),
    ])
    def test_hba1c(self, text, expected):
        assert parsers.parse_hba1c(text) == expected


class TestListParsers:
    """Free-text list fields never fail"""

    def test_medicines_brands_map_to_generics(self):
        assert parsers.parse_medicines("Glycomet and Lantus") == ["Metformin", "Insulin Glargine"]
        assert parsers.parse_medicines("janumet 50/500") == ["Sitagliptin"]

    def test_medicines_nothing_recognised(self):
        assert parsers.parse_medicines("nothing") == ["None"]

    def test_comorbidities(self):
        assert parsers.parse_comorbidities("BP and thyroid") == ["Hypertension", "Thyroid"]
        assert parsers.parse_comorbidities("बीपी") == ["Hypertension"]
        assert parsers.parse_comorbidities("none") == ["None"]

    def test_skip_keyword(self):
        assert parsers.is_skip("skip") is True
        assert parsers.is_skip("later") is True
        assert parsers.is_skip("9876543210") is False


class TestParserTotality:
    """Junk input returns None (or ["None"]) and never raises"""

    @pytest.mark.parametrize("junk", [None, "", "   ", 42, ["1"], "🙂🙂🙂", "\x00\x01"])
    def test_no_parser_raises(self, junk):
        for definition in STEP_DEFINITIONS.values():
            value = definition.parser(junk)
            if definition.field in ("medicines", "comorbidities"):
                assert value == ["None"]
            else:
                assert value is None


# ============================================================================
# TRANSITION TABLE AND PROMPTS
# ============================================================================

class TestStepTable:

    def test_linear_order(self):
        assert [step.value for step in STEP_ORDER] == [
            "language", "name", "age", "gender", "emergency_contact", "pincode",
            "consent", "diabetes_type", "duration", "medication_type",
            "medicine_names", "diet", "comorbidities", "hba1c",
        ]
        assert TOTAL_STEPS == 14
        assert step_number(OnboardingStep.LANGUAGE) == 1
        assert step_number("hba1c") == 14

    def test_each_step_leads_to_the_next(self):
        for current, following in zip(STEP_ORDER, STEP_ORDER[1:]):
            if current is OnboardingStep.MEDICATION_TYPE:
                continue
            assert resolve_next_step(current, "anything") is following

    def test_medication_branch(self):
        assert resolve_next_step(OnboardingStep.MEDICATION_TYPE, "none") is OnboardingStep.DIET
        for value in ("tablets", "insulin", "both"):
            assert resolve_next_step(OnboardingStep.MEDICATION_TYPE, value) is OnboardingStep.MEDICINE_NAMES

    def test_skipped_medicine_names_recorded_as_none(self):
        assert skipped_fields(OnboardingStep.MEDICATION_TYPE, OnboardingStep.DIET) == {"medicines": ["None"]}
        assert skipped_fields(OnboardingStep.MEDICATION_TYPE, OnboardingStep.MEDICINE_NAMES) == {}

    def test_terminal_step(self):
        assert resolve_next_step(OnboardingStep.HBA1C, 7.2) is None
        assert skipped_fields(OnboardingStep.HBA1C, None) == {}

    def test_unknown_step(self):
        with pytest.raises(UnknownStepError) as excinfo:
            resolve_next_step("bogus", "x")
        assert excinfo.value.step == "bogus"

    def test_fields_match_profile(self):
        assert sorted(d.field for d in STEP_DEFINITIONS.values()) == sorted(PROFILE_FIELDS)


class TestPromptCatalog:

    @pytest.mark.parametrize("key", list(PromptKey))
    def test_every_key_has_english(self, key):
        assert PROMPT_TEXTS[key]["en"]

    @pytest.mark.parametrize("key", list(PromptKey))
    def test_unknown_language_falls_back_to_english(self, key):
        assert get_prompt(key, "xx") == PROMPT_TEXTS[key]["en"]

    def test_localised_prompt(self):
        assert get_prompt(PromptKey.NAME, "hi") == "आपका पूरा नाम क्या है?"

    def test_placeholders(self):
        assert "Ravi" in get_prompt(PromptKey.COMPLETED, "te", name="Ravi")
        assert "3 of 14" in get_prompt(PromptKey.STATUS, "en", step=3, total=14)

    def test_welcome_lists_configured_languages(self):
        text = welcome_prompt(("en", "hi"))
        assert "1. English" in text
        assert "2. हिन्दी" in text
        assert "ಕನ್ನಡ" not in text


class TestOnboardingConfig:

    def test_defaults_from_settings(self):
        config = OnboardingConfig.from_settings()
        assert config.default_language == "en"
        assert config.supported_languages == ("en", "hi", "kn", "te")
        assert config.ai_parser_enabled is False
        assert config.message_dedup_ttl == 600

    def test_only_emergency_contact_is_skippable(self):
        config = OnboardingConfig.from_settings({"SKIPPABLE_STEPS": ["emergency_contact"]})
        assert config.is_skippable("emergency_contact")
        with pytest.raises(ImproperlyConfigured):
            OnboardingConfig.from_settings({"SKIPPABLE_STEPS": ["name"]})

    def test_unsupported_language(self):
        with pytest.raises(ImproperlyConfigured):
            OnboardingConfig.from_settings({"SUPPORTED_LANGUAGES": ["en", "fr"]})


# ============================================================================
# AI NORMALISER
# ============================================================================

class TestHFFieldNormaliser:

    @staticmethod
    def _client(content=None, error=None):
        def create(**kwargs):
            if error:
                raise error
            return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
        return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    def test_candidate_returned(self):
        normaliser = HFFieldNormaliser(model="m", client=self._client(' "55" '))
        assert normaliser.normalise("age", "fifty five") == "55"

    def test_none_answer(self):
        normaliser = HFFieldNormaliser(model="m", client=self._client("NONE"))
        assert normaliser.normalise("age", "hello") is None

    def test_inference_failure(self):
        normaliser = HFFieldNormaliser(model="m", client=self._client(error=TimeoutError("slow")))
        with pytest.raises(AIParserError):
            normaliser.normalise("age", "fifty five")

    def test_disabled_by_config(self):
        assert HFFieldNormaliser.from_config(OnboardingConfig()) is None

    def test_client_built_once_per_process(self):
        config = OnboardingConfig(ai_parser_enabled=True, ai_parser_model="test/model")
        shared_normaliser.cache_clear()
        try:
            with mock.patch("apps.onboarding.llm.InferenceClient") as client_cls:
                first = HFFieldNormaliser.from_config(config)
                second = HFFieldNormaliser.from_config(config)
            assert first is second
            client_cls.assert_called_once_with(model="test/model", token=None, timeout=8)
        finally:
            shared_normaliser.cache_clear()


# ============================================================================
# STORES
# ============================================================================

@pytest.mark.django_db
class TestSessionStore:

    def test_create_is_idempotent(self):
        store = SessionStore()
        first, created = store.create(USER)
        second, created_again = store.create(USER)
        assert created is True
        assert created_again is False
        assert first.pk == second.pk
        assert OnboardingSession.objects.count() == 1

    def test_compare_and_swap(self):
        store = SessionStore()
        session, _ = store.create(USER)
        stale = OnboardingSession.objects.get(pk=session.pk)

        assert store.update(session, OnboardingStep.NAME, {"preferred_language": "en"}) is True
        assert store.update(stale, OnboardingStep.NAME, {"preferred_language": "hi"}) is False

        row = OnboardingSession.objects.get(pk=session.pk)
        assert row.revision == 1
        assert row.fields == {"preferred_language": "en"}

    def test_reset_clears_answers(self):
        store = SessionStore()
        session, _ = store.create(USER)
        store.update(session, OnboardingStep.NAME, {"preferred_language": "hi"})

        fresh = store.reset(USER)
        assert fresh.current_step == "language"
        assert fresh.fields == {}
        assert OnboardingSession.objects.count() == 1

    def test_database_error_becomes_store_unavailable(self):
        with mock.patch.object(OnboardingSession.objects, "filter", side_effect=OperationalError("locked")):
            with pytest.raises(StoreUnavailableError):
                SessionStore().find_by_user_id(USER)


@pytest.mark.django_db
class TestProfileStore:

    def test_upsert_converts_unknown_hba1c(self):
        fields = dict(zip(PROFILE_FIELDS, [
            "hi", "Sita", 40, "female", None, "500032", True, "type_2", 2.0,
            "none", ["None"], "vegetarian", ["None"], "unknown",
        ]))
        profile = ProfileStore().upsert(USER, fields)
        assert profile.last_hba1c is None
        assert profile.completed is True
        assert profile.onboarded_at is not None

    def test_completed_profile_is_never_modified(self):
        store = ProfileStore()
        PatientProfile.objects.create(
            user_id=USER, name="Sita", age=40, gender="female", pincode="500032",
            diabetes_type="type_2", diabetes_duration_years=2, medication_type="none",
            diet_preference="vegetarian", completed=True,
        )
        store.upsert(USER, {"name": "Someone Else", "age": 90})
        profile = PatientProfile.objects.get(user_id=USER)
        assert profile.name == "Sita"
        assert profile.age == 40

    def test_set_language(self):
        profile = PatientProfile.objects.create(
            user_id=USER, name="Sita", age=40, gender="female", pincode="500032",
            diabetes_type="type_2", diabetes_duration_years=2, medication_type="none",
            diet_preference="vegetarian", completed=True,
        )
        ProfileStore().set_language(profile, "te")
        assert profile.preferred_language == "te"
        assert PatientProfile.objects.get(user_id=USER).preferred_language == "te"


# ============================================================================
# ORCHESTRATOR
# ============================================================================

@pytest.mark.django_db
class TestOrchestratorFlow:
    """Happy paths, re-prompts and the medication branch"""

    def test_first_contact_creates_session(self, orchestrator):
        reply = orchestrator.handle(USER, "hi")

        assert reply.step == "language"
        assert reply.completed is False
        assert "1. English" in reply.prompt_text
        session = OnboardingSession.objects.get(user_id=USER)
        assert session.current_step == "language"
        assert session.fields == {}

    def test_language_choice_switches_prompts(self, orchestrator):
        orchestrator.handle(USER, "hi")
        reply = orchestrator.handle(USER, "2")

        assert reply.step == "name"
        assert reply.prompt_text == get_prompt(PromptKey.NAME, "hi")
        assert OnboardingSession.objects.get(user_id=USER).fields == {"preferred_language": "hi"}

    def test_invalid_answer_reprompts(self, orchestrator):
        orchestrator.handle(USER, "hi")
        orchestrator.handle(USER, "1")
        before = OnboardingSession.objects.get(user_id=USER)

        reply = orchestrator.handle(USER, "")

        after = OnboardingSession.objects.get(user_id=USER)
        assert reply.step == "name"
        assert reply.prompt_text == (
            get_prompt(PromptKey.INVALID_NOTICE, "en") + "\n\n" + get_prompt(PromptKey.NAME, "en")
        )
        assert after.current_step == "name"
        assert after.revision == before.revision
        assert after.last_updated_at >= before.last_updated_at

    def test_every_step_rejects_without_advancing(self, orchestrator):
        """For each step with a failing answer, the step and its prompt stay put"""
        orchestrator.handle(USER, "hi")
        for answer in ENGLISH_ANSWERS[:-1]:
            session = OnboardingSession.objects.get(user_id=USER)
            definition = STEP_DEFINITIONS[OnboardingStep(session.current_step)]
            if definition.field not in ("medicines", "comorbidities"):
                reply = orchestrator.handle(USER, "???")
                assert reply.step == session.current_step
                assert reply.prompt_text.startswith(get_prompt(PromptKey.INVALID_NOTICE, "en"))
            orchestrator.handle(USER, answer)

    def test_full_flow_turn_count(self, orchestrator):
        replies = drive(orchestrator, USER, ENGLISH_ANSWERS)

        assert len(replies) == 1 + 14
        assert [r.completed for r in replies] == [False] * 14 + [True]
        assert "Ramesh Kumar" in replies[-1].prompt_text
        assert not OnboardingSession.objects.filter(user_id=USER).exists()

        profile = PatientProfile.objects.get(user_id=USER)
        assert profile.completed is True
        assert profile.preferred_language == "en"
        assert profile.name == "Ramesh Kumar"
        assert profile.age == 55
        assert profile.gender == "male"
        assert profile.emergency_contact == "+919876543210"
        assert profile.pincode == "560001"
        assert profile.consent_given is True
        assert profile.diabetes_type == "type_2"
        assert profile.diabetes_duration_years == 5.0
        assert profile.medication_type == "tablets"
        assert profile.medicines == ["Metformin"]
        assert profile.diet_preference == "vegetarian"
        assert profile.comorbidities == ["Hypertension"]
        assert profile.last_hba1c == 7.2
        assert profile.onboarded_at is not None

    def test_no_medication_skips_medicine_names(self, orchestrator):
        answers = list(ENGLISH_ANSWERS)
        answers[9] = "4"
        answers.remove("Glycomet 500")

        replies = drive(orchestrator, USER, answers)

        assert len(replies) == 1 + 13
        assert replies[10].step == "diet"
        assert replies[-1].completed is True
        profile = PatientProfile.objects.get(user_id=USER)
        assert profile.medication_type == "none"
        assert profile.medicines == ["None"]

    def test_free_text_steps_always_advance(self, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.COMORBIDITIES)
        reply = orchestrator.handle(USER, "nothing special")
        assert reply.step == "hba1c"
        assert OnboardingSession.objects.get(user_id=USER).fields["comorbidities"] == ["None"]

    def test_consent_refusal_is_recorded(self, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.CONSENT)
        reply = orchestrator.handle(USER, "no")
        assert reply.step == "diabetes_type"
        assert OnboardingSession.objects.get(user_id=USER).fields["consent_given"] is False


@pytest.mark.django_db
class TestOrchestratorIdempotency:
    """Replays and concurrent deliveries"""

    def test_terminal_replay(self, orchestrator):
        drive(orchestrator, USER, ENGLISH_ANSWERS)

        reply = orchestrator.handle(USER, "7.2")

        assert reply.completed is True
        assert reply.prompt_text == get_prompt(PromptKey.ALREADY_REGISTERED, "en", name="Ramesh Kumar")
        assert PatientProfile.objects.filter(user_id=USER).count() == 1
        assert not OnboardingSession.objects.filter(user_id=USER).exists()

    def test_lost_compare_and_swap_does_not_advance_twice(self, orchestrator):
        orchestrator.handle(USER, "hi")
        orchestrator.handle(USER, "1")
        stale = OnboardingSession.objects.get(user_id=USER)
        orchestrator.handle(USER, "Ramesh Kumar")

        class StaleSessionStore(SessionStore):
            served = False

            def find_by_user_id(self, user_id):
                if not self.served:
                    self.served = True
                    return stale
                return super().find_by_user_id(user_id)

        racing = OnboardingOrchestrator(session_store=StaleSessionStore(), config=orchestrator.config)
        reply = racing.handle(USER, "Ramesh Kumar")

        assert reply.step == "age"
        assert reply.prompt_text == get_prompt(PromptKey.AGE, "en")
        session = OnboardingSession.objects.get(user_id=USER)
        assert session.current_step == "age"
        assert session.revision == stale.revision + 1

    def test_concurrent_terminal_delivery_writes_one_profile(self, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.HBA1C)
        stale = OnboardingSession.objects.get(user_id=USER)
        orchestrator.handle(USER, "7.2")

        class StaleSessionStore(SessionStore):
            def find_by_user_id(self, user_id):
                return stale

        class LateProfileStore(ProfileStore):
            looked = False

            def find_by_user_id(self, user_id):
                if not self.looked:
                    self.looked = True
                    return None
                return super().find_by_user_id(user_id)

        racing = OnboardingOrchestrator(
            session_store=StaleSessionStore(),
            profile_store=LateProfileStore(),
            config=orchestrator.config,
        )
        reply = racing.handle(USER, "7.2")

        assert reply.completed is True
        assert reply.prompt_text == get_prompt(PromptKey.COMPLETED, "en", name="Ramesh Kumar")
        assert PatientProfile.objects.filter(user_id=USER).count() == 1
        assert not OnboardingSession.objects.filter(user_id=USER).exists()


@pytest.mark.django_db
class TestOrchestratorFailures:

    def test_store_unavailable(self, orchestrator):
        with mock.patch.object(ProfileStore, "find_by_user_id", side_effect=StoreUnavailableError("down")):
            reply = orchestrator.handle(USER, "hi")

        assert reply.prompt_text == get_prompt(PromptKey.STORE_UNAVAILABLE, "en")
        assert reply.completed is False
        assert not OnboardingSession.objects.exists()

    def test_store_unavailable_mid_flow_does_not_advance(self, orchestrator):
        orchestrator.handle(USER, "hi")
        orchestrator.handle(USER, "2")

        with mock.patch.object(SessionStore, "update", side_effect=StoreUnavailableError("down")):
            reply = orchestrator.handle(USER, "Ramesh Kumar")

        assert reply.prompt_text == get_prompt(PromptKey.STORE_UNAVAILABLE, "hi")
        assert reply.step == "name"
        assert OnboardingSession.objects.get(user_id=USER).current_step == "name"

    def test_commit_failure_rolls_back_profile(self, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.HBA1C)

        with mock.patch.object(SessionStore, "delete", side_effect=StoreUnavailableError("down")):
            reply = orchestrator.handle(USER, "7.2")

        assert reply.prompt_text == get_prompt(PromptKey.STORE_UNAVAILABLE, "en")
        assert reply.completed is False
        assert not PatientProfile.objects.filter(user_id=USER).exists()
        assert OnboardingSession.objects.get(user_id=USER).current_step == "hba1c"

        retry = orchestrator.handle(USER, "7.2")

        assert retry.completed is True
        assert PatientProfile.objects.get(user_id=USER).last_hba1c == 7.2
        assert not OnboardingSession.objects.filter(user_id=USER).exists()

    def test_unknown_step_restarts(self, orchestrator):
        orchestrator.handle(USER, "hi")
        orchestrator.handle(USER, "1")
        OnboardingSession.objects.filter(user_id=USER).update(current_step="bogus")

        reply = orchestrator.handle(USER, "Ramesh Kumar")

        assert reply.step == "language"
        assert reply.prompt_text.startswith(get_prompt(PromptKey.RESTART, "en"))
        assert "1. English" in reply.prompt_text
        session = OnboardingSession.objects.get(user_id=USER)
        assert session.current_step == "language"
        assert session.fields == {}

    def test_skip_shortcut(self):
        config = OnboardingConfig.from_settings({"SKIPPABLE_STEPS": ["emergency_contact"]})
        orchestrator = OnboardingOrchestrator(config=config)
        drive_to(orchestrator, USER, OnboardingStep.EMERGENCY_CONTACT)

        reply = orchestrator.handle(USER, "skip")

        assert reply.step == "pincode"
        assert OnboardingSession.objects.get(user_id=USER).fields["emergency_contact"] is None

    def test_skip_rejected_when_not_configured(self, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.EMERGENCY_CONTACT)
        reply = orchestrator.handle(USER, "skip")
        assert reply.step == "emergency_contact"


@pytest.mark.django_db
class TestOrchestratorAINormaliser:

    def test_normaliser_rescues_unparsed_answer(self, onboarding_config):
        normaliser = FakeNormaliser(candidate="55")
        orchestrator = OnboardingOrchestrator(config=onboarding_config, normaliser=normaliser)
        drive_to(orchestrator, USER, OnboardingStep.AGE)

        reply = orchestrator.handle(USER, "fifty five")

        assert reply.step == "gender"
        assert normaliser.calls == [("age", "fifty five")]
        assert OnboardingSession.objects.get(user_id=USER).fields["age"] == 55

    def test_normaliser_not_called_when_regex_succeeds(self, onboarding_config):
        normaliser = FakeNormaliser(candidate="99")
        orchestrator = OnboardingOrchestrator(config=onboarding_config, normaliser=normaliser)
        drive_to(orchestrator, USER, OnboardingStep.AGE)

        orchestrator.handle(USER, "55")

        assert normaliser.calls == []

    def test_normaliser_candidate_still_validated(self, onboarding_config):
        orchestrator = OnboardingOrchestrator(config=onboarding_config, normaliser=FakeNormaliser(candidate="500"))
        drive_to(orchestrator, USER, OnboardingStep.AGE)

        reply = orchestrator.handle(USER, "very old")

        assert reply.step == "age"

    def test_normaliser_failure_falls_back(self, onboarding_config):
        normaliser = FakeNormaliser(error=AIParserError("timeout"))
        orchestrator = OnboardingOrchestrator(config=onboarding_config, normaliser=normaliser)
        drive_to(orchestrator, USER, OnboardingStep.AGE)

        reply = orchestrator.handle(USER, "fifty five")

        assert reply.step == "age"
        assert reply.prompt_text.startswith(get_prompt(PromptKey.INVALID_NOTICE, "en"))


@pytest.mark.django_db
class TestOrchestratorCommands:

    def test_reset(self, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.GENDER)

        reply = orchestrator.reset(USER)

        assert reply.step == "language"
        session = OnboardingSession.objects.get(user_id=USER)
        assert session.current_step == "language"
        assert session.fields == {}

    def test_reset_leaves_completed_profile(self, orchestrator):
        drive(orchestrator, USER, ENGLISH_ANSWERS)
        reply = orchestrator.reset(USER)
        assert reply.completed is True
        assert not OnboardingSession.objects.exists()

    def test_status(self, orchestrator):
        assert orchestrator.status(USER).started is False

        drive_to(orchestrator, USER, OnboardingStep.AGE)
        onboarding_status = orchestrator.status(USER)
        assert onboarding_status.step == "age"
        assert onboarding_status.step_number == 3
        assert onboarding_status.total_steps == 14

    def test_progress_repeats_current_question(self, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.AGE)
        reply = orchestrator.progress(USER)
        assert reply.prompt_text.startswith("Registration progress: question 3 of 14.")
        assert reply.prompt_text.endswith(get_prompt(PromptKey.AGE, "en"))


# ============================================================================
# API
# ============================================================================

@pytest.mark.django_db
class TestOnboardingAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('onboarding:status', kwargs={'user_id': USER}))
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_status_not_started(self, staff_client):
        response = staff_client.get(reverse('onboarding:status', kwargs={'user_id': USER}))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_status_and_reset(self, staff_client, orchestrator):
        drive_to(orchestrator, USER, OnboardingStep.AGE)

        response = staff_client.get(reverse('onboarding:status', kwargs={'user_id': USER}))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['step'] == 'age'
        assert response.data['step_number'] == 3

        response = staff_client.post(reverse('onboarding:reset', kwargs={'user_id': USER}))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['step'] == 'language'
        assert OnboardingSession.objects.get(user_id=USER).current_step == 'language'
