"""
Create sample onboarding sessions and patient profiles for local development
"""

import os
import sys
import django

# Setup Django
sys.path.append(os.path.dirname(os.path.abspath(__file__)))
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'glucosahayak.settings.development')
django.setup()

from apps.messaging.services import route_incoming_message
from apps.onboarding.models import OnboardingSession
from apps.onboarding.orchestrator import OnboardingOrchestrator
from apps.patients.models import PatientProfile
from apps.readings.models import GlucoseReading


SAMPLE_CONVERSATIONS = {
    # English, tablets
    '+919845012345': [
        "hi", "1", "Ramesh Kumar", "55", "1", "9845098450", "560001", "yes",
        "2", "5 years", "1", "Glycomet 500, Amaryl 1mg", "veg", "BP", "7.8",
    ],
    # Hindi, no medication (medicine names question is skipped)
    '+919811122233': [
        "namaste", "2", "सीता देवी", "48", "2", "9811122244", "110001", "हाँ",
        "2", "6 महीने", "4", "शाकाहारी", "थायराइड", "पता नहीं",
    ],
    # Telugu, insulin
    '+919900011122': [
        "hello", "4", "Lakshmi", "34", "2", "9900011133", "500032", "అవును",
        "1", "12", "2", "Lantus", "non veg", "none", "8.4",
    ],
    # Kannada, still in progress
    '+919886655443': [
        "hi", "3", "Manjunath", "61",
    ],
}

# Sent after onboarding completes
SAMPLE_FOLLOW_UPS = {
    '+919845012345': ["sugar 118", "my sugar is 165"],
    '+919811122233': ["शुगर 62"],
    '+919900011122': ["చక్కెర 210", "english"],
}


def create_sample_profiles():
    """Run each sample conversation through the onboarding orchestrator"""
    orchestrator = OnboardingOrchestrator.from_settings()

    for user_id, messages in SAMPLE_CONVERSATIONS.items():
        if PatientProfile.objects.filter(user_id=user_id).exists():
            print(f"⏭️  {user_id}: profile already exists")
            continue

        orchestrator.reset(user_id)
        reply = None
        for text in messages[1:]:
            reply = orchestrator.handle(user_id, text)

        if reply is not None and reply.completed:
            print(f"✅ {user_id}: onboarding completed")
        else:
            print(f"📝 {user_id}: waiting at step '{reply.step if reply else 'language'}'")

    return orchestrator


def create_sample_readings(orchestrator):
    """Glucose readings and a language change from registered patients"""
    for user_id, messages in SAMPLE_FOLLOW_UPS.items():
        for text in messages:
            result = route_incoming_message(user_id, text, orchestrator=orchestrator)
            first_line = result["prompt_text"].splitlines()[0] if result["prompt_text"] else ""
            print(f"🩸 {user_id}: {text!r} -> {first_line}")


def show_summary():
    print("\n📊 Summary")
    print(f"   Completed profiles: {PatientProfile.objects.filter(completed=True).count()}")
    print(f"   Sessions in progress: {OnboardingSession.objects.count()}")
    print(f"   Glucose readings: {GlucoseReading.objects.count()}")

    for profile in PatientProfile.objects.all():
        print(
            f"   👤 {profile.name} ({profile.get_preferred_language_display()}) - "
            f"{profile.get_diabetes_type_display()}, {profile.get_medication_type_display()}, "
            f"medicines={profile.medicines}, HbA1c={profile.last_hba1c}"
        )


def main():
    print("🚀 Gluco-Sahayak - Sample Data")
    print("=" * 60)

    orchestrator = create_sample_profiles()
    create_sample_readings(orchestrator)
    show_summary()

    print("\n" + "=" * 60)
    print("📋 What You Can Do:")
    print("   🌐 Visit: http://127.0.0.1:8000/admin/ to browse profiles and sessions")
    print("   💬 Chat: POST http://127.0.0.1:8000/api/v1/messaging/inbound/ with {user_id, text}")
    print("   📖 Docs: http://127.0.0.1:8000/api/docs/")


if __name__ == "__main__":
    main()
