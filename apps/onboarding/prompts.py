"""
Prompt Catalog
Every user-facing message (onboarding questions, outcomes, glucose replies), keyed by PromptKey -> language code.
English is mandatory for every key and is the fallback for the others.
"""

from enum import Enum
from typing import Sequence


class PromptKey(Enum):
    # One per step
    LANGUAGE = "language"
    NAME = "name"
    AGE = "age"
    GENDER = "gender"
    EMERGENCY_CONTACT = "emergency_contact"
    PINCODE = "pincode"
    CONSENT = "consent"
    DIABETES_TYPE = "diabetes_type"
    DURATION = "duration"
    MEDICATION_TYPE = "medication_type"
    MEDICINE_NAMES = "medicine_names"
    DIET = "diet"
    COMORBIDITIES = "comorbidities"
    HBA1C = "hba1c"

    # Outcomes and commands
    INVALID_NOTICE = "invalid_notice"
    COMPLETED = "completed"
    ALREADY_REGISTERED = "already_registered"
    STORE_UNAVAILABLE = "store_unavailable"
    RESTART = "restart"
    HELP = "help"
    STATUS = "status"

    # After onboarding
    GLUCOSE_CRITICAL_LOW = "glucose_critical_low"
    GLUCOSE_NORMAL = "glucose_normal"
    GLUCOSE_ELEVATED = "glucose_elevated"
    GLUCOSE_CRITICAL_HIGH = "glucose_critical_high"
    LANGUAGE_CHANGED = "language_changed"


FALLBACK_LANGUAGE = "en"

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "हिन्दी",
    "kn": "ಕನ್ನಡ",
    "te": "తెలుగు",
}


# ---------------------------------------------------------------------------
# Prompt text
# ---------------------------------------------------------------------------

PROMPT_TEXTS = {
    PromptKey.LANGUAGE: {
        "en": (
            "🙏 Welcome to Gluco-Sahayak, your diabetes companion!\n"
            "ग्लूको-सहायक में आपका स्वागत है! | ಸ್ವಾಗತ! | స్వాగతం!\n\n"
            "Please choose your language:\n"
            "{menu}"
        ),
    },

    PromptKey.NAME: {
        "en": "What is your full name?",
        "hi": "आपका पूरा नाम क्या है?",
        "kn": "ನಿಮ್ಮ ಪೂರ್ಣ ಹೆಸರು ಏನು?",
        "te": "మీ పూర్తి పేరు ఏమిటి?",
    },

    PromptKey.AGE: {
        "en": "How old are you? (in years)",
        "hi": "आपकी उम्र कितनी है? (वर्षों में)",
        "kn": "ನಿಮ್ಮ ವಯಸ್ಸು ಎಷ್ಟು? (ವರ್ಷಗಳಲ್ಲಿ)",
        "te": "మీ వయస్సు ఎంత? (సంవత్సరాలలో)",
    },

    PromptKey.GENDER: {
        "en": "Your gender:\n1. Male\n2. Female\n3. Other / Prefer not to say",
        "hi": "आपका लिंग:\n1. पुरुष\n2. महिला\n3. अन्य / बताना नहीं चाहते",
        "kn": "ನಿಮ್ಮ ಲಿಂಗ:\n1. ಪುರುಷ\n2. ಮಹಿಳೆ\n3. ಇತರ",
        "te": "మీ లింగం:\n1. పురుషుడు\n2. స్త్రీ\n3. ఇతర",
    },

    PromptKey.EMERGENCY_CONTACT: {
        "en": "Please share an emergency contact mobile number (10 digits).",
        "hi": "कृपया एक आपातकालीन संपर्क मोबाइल नंबर भेजें (10 अंक)।",
        "kn": "ದಯವಿಟ್ಟು ತುರ್ತು ಸಂಪರ್ಕ ಮೊಬೈಲ್ ಸಂಖ್ಯೆ ಕಳುಹಿಸಿ (10 ಅಂಕಿಗಳು).",
        "te": "దయచేసి అత్యవసర సంప్రదింపు మొబైల్ నంబర్ పంపండి (10 అంకెలు).",
    },

    PromptKey.PINCODE: {
        "en": "What is your area pincode? (6 digits)",
        "hi": "आपके क्षेत्र का पिनकोड क्या है? (6 अंक)",
        "kn": "ನಿಮ್ಮ ಪ್ರದೇಶದ ಪಿನ್‌ಕೋಡ್ ಯಾವುದು? (6 ಅಂಕಿಗಳು)",
        "te": "మీ ప్రాంతం పిన్‌కోడ్ ఏమిటి? (6 అంకెలు)",
    },

    PromptKey.CONSENT: {
        "en": (
            "Gluco-Sahayak stores your health details to give you personalised "
            "diabetes guidance. It does not replace your doctor.\n"
            "Do you agree?\n1. Yes\n2. No"
        ),
        "hi": (
            "ग्लूको-सहायक आपको व्यक्तिगत मधुमेह सलाह देने के लिए आपकी स्वास्थ्य "
            "जानकारी संग्रहीत करता है। यह आपके डॉक्टर का विकल्प नहीं है।\n"
            "क्या आप सहमत हैं?\n1. हाँ\n2. नहीं"
        ),
        "kn": (
            "ವೈಯಕ್ತಿಕ ಮಧುಮೇಹ ಮಾರ್ಗದರ್ಶನಕ್ಕಾಗಿ ಗ್ಲೂಕೋ-ಸಹಾಯಕ ನಿಮ್ಮ ಆರೋಗ್ಯ ವಿವರಗಳನ್ನು "
            "ಸಂಗ್ರಹಿಸುತ್ತದೆ. ಇದು ವೈದ್ಯರಿಗೆ ಬದಲಿ ಅಲ್ಲ.\n"
            "ನೀವು ಒಪ್ಪುತ್ತೀರಾ?\n1. ಹೌದು\n2. ಇಲ್ಲ"
        ),
        "te": (
            "వ్యక్తిగత మధుమేహ సలహా కోసం గ్లూకో-సహాయక్ మీ ఆరోగ్య వివరాలను "
            "నిల్వ చేస్తుంది. ఇది మీ వైద్యుడికి ప్రత్యామ్నాయం కాదు.\n"
            "మీరు అంగీకరిస్తారా?\n1. అవును\n2. లేదు"
        ),
    },

    PromptKey.DIABETES_TYPE: {
        "en": "Which type of diabetes do you have?\n1. Type 1\n2. Type 2\n3. Gestational\n4. Other / Not sure",
        "hi": "आपको किस प्रकार का मधुमेह है?\n1. टाइप 1\n2. टाइप 2\n3. गर्भावस्था मधुमेह\n4. अन्य / पता नहीं",
        "kn": "ನಿಮಗೆ ಯಾವ ರೀತಿಯ ಮಧುಮೇಹವಿದೆ?\n1. ಟೈಪ್ 1\n2. ಟೈಪ್ 2\n3. ಗರ್ಭಾವಸ್ಥೆ\n4. ಇತರ / ಗೊತ್ತಿಲ್ಲ",
        "te": "మీకు ఏ రకమైన మధుమేహం ఉంది?\n1. టైప్ 1\n2. టైప్ 2\n3. గర్భధారణ\n4. ఇతర / తెలియదు",
    },

    PromptKey.DURATION: {
        "en": "How long have you had diabetes? (e.g. 5 years, 6 months, just diagnosed)",
        "hi": "आपको कितने समय से मधुमेह है? (जैसे 5 साल, 6 महीने, अभी पता चला)",
        "kn": "ನಿಮಗೆ ಎಷ್ಟು ಸಮಯದಿಂದ ಮಧುಮೇಹವಿದೆ? (ಉದಾ. 5 ವರ್ಷ, 6 ತಿಂಗಳು, ಹೊಸದಾಗಿ)",
        "te": "మీకు ఎంత కాలంగా మధుమేహం ఉంది? (ఉదా. 5 సంవత్సరాలు, 6 నెలలు, కొత్తగా)",
    },

    PromptKey.MEDICATION_TYPE: {
        "en": "What medication do you take?\n1. Tablets\n2. Insulin\n3. Both\n4. None",
        "hi": "आप कौन सी दवा लेते हैं?\n1. गोलियां\n2. इंसुलिन\n3. दोनों\n4. कोई नहीं",
        "kn": "ನೀವು ಯಾವ ಔಷಧಿ ತೆಗೆದುಕೊಳ್ಳುತ್ತೀರಿ?\n1. ಮಾತ್ರೆಗಳು\n2. ಇನ್ಸುಲಿನ್\n3. ಎರಡೂ\n4. ಯಾವುದೂ ಇಲ್ಲ",
        "te": "మీరు ఏ మందులు తీసుకుంటారు?\n1. మాత్రలు\n2. ఇన్సులిన్\n3. రెండూ\n4. ఏమీ లేదు",
    },

    PromptKey.MEDICINE_NAMES: {
        "en": "Please type the names of your diabetes medicines (e.g. Metformin, Glycomet, Lantus).",
        "hi": "कृपया अपनी मधुमेह दवाओं के नाम लिखें (जैसे Metformin, Glycomet, Lantus)।",
        "kn": "ದಯವಿಟ್ಟು ನಿಮ್ಮ ಮಧುಮೇಹ ಔಷಧಿಗಳ ಹೆಸರುಗಳನ್ನು ಬರೆಯಿರಿ (ಉದಾ. Metformin, Glycomet, Lantus).",
        "te": "దయచేసి మీ మధుమేహ మందుల పేర్లు రాయండి (ఉదా. Metformin, Glycomet, Lantus).",
    },

    PromptKey.DIET: {
        "en": "Your diet preference:\n1. Vegetarian\n2. Non-vegetarian\n3. Eggetarian\n4. Vegan",
        "hi": "आपका आहार:\n1. शाकाहारी\n2. मांसाहारी\n3. अंडा खाने वाले\n4. वीगन",
        "kn": "ನಿಮ್ಮ ಆಹಾರ ಪದ್ಧತಿ:\n1. ಸಸ್ಯಾಹಾರಿ\n2. ಮಾಂಸಾಹಾರಿ\n3. ಮೊಟ್ಟೆ ಸೇವಿಸುವವರು\n4. ವೀಗನ್",
        "te": "మీ ఆహార అలవాటు:\n1. శాకాహారి\n2. మాంసాహారి\n3. గుడ్డు తినేవారు\n4. వీగన్",
    },

    PromptKey.COMORBIDITIES: {
        "en": "Do you have any other health conditions? (e.g. BP, thyroid, heart, kidney) Reply 'none' if not.",
        "hi": "क्या आपको कोई अन्य बीमारी है? (जैसे बीपी, थायराइड, दिल, किडनी) नहीं तो 'कोई नहीं' लिखें।",
        "kn": "ನಿಮಗೆ ಬೇರೆ ಯಾವುದಾದರೂ ಆರೋಗ್ಯ ಸಮಸ್ಯೆ ಇದೆಯೇ? (ಉದಾ. ಬಿಪಿ, ಥೈರಾಯ್ಡ್, ಹೃದಯ) ಇಲ್ಲದಿದ್ದರೆ 'ಇಲ್ಲ' ಎಂದು ಬರೆಯಿರಿ.",
        "te": "మీకు ఇతర ఆరోగ్య సమస్యలు ఉన్నాయా? (ఉదా. బీపీ, థైరాయిడ్, గుండె) లేకపోతే 'లేదు' అని రాయండి.",
    },

    PromptKey.HBA1C: {
        "en": "What was your last HbA1c value? (e.g. 7.2) Reply \"don't know\" if you are not sure.",
        "hi": "आपका पिछला HbA1c कितना था? (जैसे 7.2) पता न हो तो 'पता नहीं' लिखें।",
        "kn": "ನಿಮ್ಮ ಕೊನೆಯ HbA1c ಮೌಲ್ಯ ಎಷ್ಟು? (ಉದಾ. 7.2) ಗೊತ್ತಿಲ್ಲದಿದ್ದರೆ 'ಗೊತ್ತಿಲ್ಲ' ಎಂದು ಬರೆಯಿರಿ.",
        "te": "మీ చివరి HbA1c విలువ ఎంత? (ఉదా. 7.2) తెలియకపోతే 'తెలియదు' అని రాయండి.",
    },

    PromptKey.INVALID_NOTICE: {
        "en": "Sorry, I didn't understand that.",
        "hi": "क्षमा करें, मैं समझ नहीं पाया।",
        "kn": "ಕ್ಷಮಿಸಿ, ನನಗೆ ಅರ್ಥವಾಗಲಿಲ್ಲ.",
        "te": "క్షమించండి, నాకు అర్థం కాలేదు.",
    },

    PromptKey.COMPLETED: {
        "en": (
            "✅ Thank you, {name}! Your profile is complete.\n"
            "You can now send me your glucose readings or ask any diabetes question."
        ),
        "hi": (
            "✅ धन्यवाद, {name}! आपकी प्रोफ़ाइल पूरी हो गई है।\n"
            "अब आप अपनी शुगर रीडिंग भेज सकते हैं या मधुमेह से जुड़ा कोई भी सवाल पूछ सकते हैं।"
        ),
        "kn": (
            "✅ ಧನ್ಯವಾದಗಳು, {name}! ನಿಮ್ಮ ಪ್ರೊಫೈಲ್ ಪೂರ್ಣಗೊಂಡಿದೆ.\n"
            "ಈಗ ನಿಮ್ಮ ಸಕ್ಕರೆ ರೀಡಿಂಗ್ ಕಳುಹಿಸಬಹುದು ಅಥವಾ ಮಧುಮೇಹದ ಬಗ್ಗೆ ಪ್ರಶ್ನೆ ಕೇಳಬಹುದು."
        ),
        "te": (
            "✅ ధన్యవాదాలు, {name}! మీ ప్రొఫైల్ పూర్తయింది.\n"
            "ఇప్పుడు మీ షుగర్ రీడింగ్ పంపవచ్చు లేదా మధుమేహం గురించి ఏదైనా అడగవచ్చు."
        ),
    },

    PromptKey.ALREADY_REGISTERED: {
        "en": (
            "You are already registered with Gluco-Sahayak, {name}.\n"
            "Send a reading like 'sugar 120' to log it, or a language name to switch language."
        ),
        "hi": (
            "{name}, आप पहले से ग्लूको-सहायक में पंजीकृत हैं।\n"
            "रीडिंग दर्ज करने के लिए 'शुगर 120' भेजें, या भाषा बदलने के लिए भाषा का नाम भेजें।"
        ),
        "kn": (
            "{name}, ನೀವು ಈಗಾಗಲೇ ಗ್ಲೂಕೋ-ಸಹಾಯಕದಲ್ಲಿ ನೋಂದಾಯಿಸಿದ್ದೀರಿ.\n"
            "ರೀಡಿಂಗ್ ದಾಖಲಿಸಲು 'ಸಕ್ಕರೆ 120' ಕಳುಹಿಸಿ."
        ),
        "te": (
            "{name}, మీరు ఇప్పటికే గ్లూకో-సహాయక్‌లో నమోదు అయ్యారు.\n"
            "రీడింగ్ నమోదు చేయడానికి 'చక్కెర 120' పంపండి."
        ),
    },

    PromptKey.STORE_UNAVAILABLE: {
        "en": "⚠️ We are having a temporary problem. Please send your answer again in a few minutes.",
        "hi": "⚠️ अभी तकनीकी समस्या है। कृपया कुछ मिनट बाद अपना उत्तर फिर से भेजें।",
        "kn": "⚠️ ತಾತ್ಕಾಲಿಕ ತೊಂದರೆ ಇದೆ. ದಯವಿಟ್ಟು ಕೆಲವು ನಿಮಿಷಗಳ ನಂತರ ಮತ್ತೆ ಕಳುಹಿಸಿ.",
        "te": "⚠️ తాత్కాలిక సమస్య ఉంది. దయచేసి కొన్ని నిమిషాల తర్వాత మళ్లీ పంపండి.",
    },

    PromptKey.RESTART: {
        "en": "Something went wrong with your registration, so let's start again.",
        "hi": "आपके पंजीकरण में कुछ गड़बड़ हुई, चलिए फिर से शुरू करते हैं।",
        "kn": "ನೋಂದಣಿಯಲ್ಲಿ ತೊಂದರೆಯಾಗಿದೆ, ಮತ್ತೆ ಪ್ರಾರಂಭಿಸೋಣ.",
        "te": "నమోదులో సమస్య వచ్చింది, మళ్లీ ప్రారంభిద్దాం.",
    },

    PromptKey.HELP: {
        "en": (
            "Gluco-Sahayak registration help:\n"
            "- Answer each question to complete your profile\n"
            "- 'status' shows your progress\n"
            "- 'restart' starts registration again"
        ),
        "hi": (
            "ग्लूको-सहायक पंजीकरण सहायता:\n"
            "- प्रोफ़ाइल पूरी करने के लिए हर सवाल का जवाब दें\n"
            "- 'status' से अपनी प्रगति देखें\n"
            "- 'restart' से फिर से शुरू करें"
        ),
        "kn": (
            "ಗ್ಲೂಕೋ-ಸಹಾಯಕ ನೋಂದಣಿ ಸಹಾಯ:\n"
            "- ಪ್ರೊಫೈಲ್ ಪೂರ್ಣಗೊಳಿಸಲು ಪ್ರತಿಯೊಂದು ಪ್ರಶ್ನೆಗೆ ಉತ್ತರಿಸಿ\n"
            "- 'status' ನಿಮ್ಮ ಪ್ರಗತಿ ತೋರಿಸುತ್ತದೆ\n"
            "- 'restart' ಮತ್ತೆ ಪ್ರಾರಂಭಿಸುತ್ತದೆ"
        ),
        "te": (
            "గ్లూకో-సహాయక్ నమోదు సహాయం:\n"
            "- ప్రొఫైల్ పూర్తి చేయడానికి ప్రతి ప్రశ్నకు జవాబు ఇవ్వండి\n"
            "- 'status' మీ పురోగతిని చూపుతుంది\n"
            "- 'restart' మళ్లీ ప్రారంభిస్తుంది"
        ),
    },

    PromptKey.STATUS: {
        "en": "Registration progress: question {step} of {total}.",
        "hi": "पंजीकरण प्रगति: प्रश्न {step} / {total}।",
        "kn": "ನೋಂದಣಿ ಪ್ರಗತಿ: ಪ್ರಶ್ನೆ {step} / {total}.",
        "te": "నమోదు పురోగతి: ప్రశ్న {step} / {total}.",
    },

    PromptKey.GLUCOSE_CRITICAL_LOW: {
        "en": (
            "🚨 *CRITICAL: Hypoglycemia!*\n\n"
            "Your glucose is {value} mg/dL (VERY LOW)\n\n"
            "*Immediate actions:*\n"
            "1. Eat 15g fast-acting carbs (3 glucose tablets OR 1 tbsp honey)\n"
            "2. Recheck after 15 minutes\n"
            "3. If still low, repeat step 1"
        ),
        "hi": (
            "🚨 *गंभीर: निम्न शुगर!*\n\n"
            "आपका शुगर {value} mg/dL है (बहुत कम)\n\n"
            "*तुरंत करें:*\n"
            "1. 3 ग्लूकोज़ टैबलेट या 1 चम्मच शहद लें\n"
            "2. 15 मिनट बाद फिर जांचें\n"
            "3. अभी भी कम है तो दोहराएं"
        ),
        "kn": (
            "🚨 *ಗಂಭೀರ: ಕಡಿಮೆ ಸಕ್ಕರೆ!*\n\n"
            "ನಿಮ್ಮ ಗ್ಲೂಕೋಸ್ {value} mg/dL (ತುಂಬಾ ಕಡಿಮೆ)\n\n"
            "1. 3 ಗ್ಲೂಕೋಸ್ ಮಾತ್ರೆ ಅಥವಾ 1 ಚಮಚ ಜೇನು ಸೇವಿಸಿ\n"
            "2. 15 ನಿಮಿಷದ ನಂತರ ಮತ್ತೆ ಪರೀಕ್ಷಿಸಿ"
        ),
        "te": (
            "🚨 *తీవ్రం: తక్కువ చక్కెర!*\n\n"
            "మీ గ్లూకోజ్ {value} mg/dL (చాలా తక్కువ)\n\n"
            "1. 3 గ్లూకోజ్ మాత్రలు లేదా 1 చెంచా తేనె తీసుకోండి\n"
            "2. 15 నిమిషాల తర్వాత మళ్లీ పరీక్షించండి"
        ),
    },

    PromptKey.GLUCOSE_NORMAL: {
        "en": (
            "✅ *Excellent control!*\n\n"
            "Glucose: {value} mg/dL (normal range)\n"
            "Keep following your routine! 🎉\n\n"
            "7-day average: {average} mg/dL"
        ),
        "hi": (
            "✅ *बहुत बढ़िया!*\n\n"
            "शुगर: {value} mg/dL (सामान्य)\n"
            "ऐसे ही जारी रखें! 🎉\n\n"
            "7-दिन औसत: {average} mg/dL"
        ),
        "kn": (
            "✅ *ಉತ್ತಮ ನಿಯಂತ್ರಣ!*\n\n"
            "ಗ್ಲೂಕೋಸ್: {value} mg/dL (ಸಾಮಾನ್ಯ)\n\n"
            "7 ದಿನಗಳ ಸರಾಸರಿ: {average} mg/dL"
        ),
        "te": (
            "✅ *చక్కటి నియంత్రణ!*\n\n"
            "గ్లూకోజ్: {value} mg/dL (సాధారణం)\n\n"
            "7 రోజుల సగటు: {average} mg/dL"
        ),
    },

    PromptKey.GLUCOSE_ELEVATED: {
        "en": (
            "⚠️ *Elevated glucose*\n\n"
            "Glucose: {value} mg/dL (above target)\n\n"
            "*Recommendations:*\n"
            "• Take medication if missed\n"
            "• Walk for 15 minutes\n"
            "• Drink 2 glasses of water\n"
            "• Recheck in 2 hours\n\n"
            "7-day average: {average} mg/dL"
        ),
        "hi": (
            "⚠️ *ऊंचा शुगर*\n\n"
            "शुगर: {value} mg/dL (लक्ष्य से अधिक)\n\n"
            "*सुझाव:*\n"
            "• दवा ली है ना जांच लें\n"
            "• 15 मिनट टहलें\n"
            "• 2 गिलास पानी पिएं\n"
            "• 2 घंटे में फिर जांचें\n\n"
            "7-दिन औसत: {average} mg/dL"
        ),
        "kn": (
            "⚠️ *ಹೆಚ್ಚಿನ ಗ್ಲೂಕೋಸ್*\n\n"
            "ಗ್ಲೂಕೋಸ್: {value} mg/dL (ಗುರಿಗಿಂತ ಹೆಚ್ಚು)\n"
            "• 15 ನಿಮಿಷ ನಡೆಯಿರಿ\n"
            "• 2 ಲೋಟ ನೀರು ಕುಡಿಯಿರಿ\n\n"
            "7 ದಿನಗಳ ಸರಾಸರಿ: {average} mg/dL"
        ),
        "te": (
            "⚠️ *ఎక్కువ గ్లూకోజ్*\n\n"
            "గ్లూకోజ్: {value} mg/dL (లక్ష్యం కంటే ఎక్కువ)\n"
            "• 15 నిమిషాలు నడవండి\n"
            "• 2 గ్లాసుల నీళ్లు తాగండి\n\n"
            "7 రోజుల సగటు: {average} mg/dL"
        ),
    },

    PromptKey.GLUCOSE_CRITICAL_HIGH: {
        "en": (
            "🚨 *CRITICAL: High blood sugar!*\n\n"
            "Glucose: {value} mg/dL (critical level)\n\n"
            "*Immediate actions:*\n"
            "1. Check ketones if possible\n"
            "2. Take rapid-acting insulin (if prescribed)\n"
            "3. Drink plenty of water\n\n"
            "📞 If you feel nausea or confusion, call emergency services!"
        ),
        "hi": (
            "🚨 *गंभीर: उच्च शुगर!*\n\n"
            "शुगर: {value} mg/dL (खतरनाक स्तर)\n\n"
            "*तुरंत करें:*\n"
            "1. अगर हो तो ketones जांचें\n"
            "2. इंसुलिन लें (अगर prescribed है)\n"
            "3. खूब पानी पिएं\n\n"
            "📞 उल्टी या चक्कर हो तो तुरंत emergency call करें!"
        ),
        "kn": (
            "🚨 *ಗಂಭೀರ: ಹೆಚ್ಚಿನ ಸಕ್ಕರೆ!*\n\n"
            "ಗ್ಲೂಕೋಸ್: {value} mg/dL (ಅಪಾಯಕಾರಿ ಮಟ್ಟ)\n\n"
            "ಸಾಕಷ್ಟು ನೀರು ಕುಡಿಯಿರಿ. ವಾಕರಿಕೆ ಅಥವಾ ಗೊಂದಲವಾದರೆ ತುರ್ತು ಸೇವೆಗೆ ಕರೆ ಮಾಡಿ!"
        ),
        "te": (
            "🚨 *తీవ్రం: ఎక్కువ చక్కెర!*\n\n"
            "గ్లూకోజ్: {value} mg/dL (ప్రమాదకర స్థాయి)\n\n"
            "ఎక్కువ నీళ్లు తాగండి. వికారం లేదా గందరగోళం ఉంటే అత్యవసర సేవలకు కాల్ చేయండి!"
        ),
    },

    PromptKey.LANGUAGE_CHANGED: {
        "en": "✓ Language changed to {language}",
        "hi": "✓ भाषा बदल दी गई: {language}",
        "kn": "✓ ಭಾಷೆಯನ್ನು ಬದಲಾಯಿಸಲಾಗಿದೆ: {language}",
        "te": "✓ భాష మార్చబడింది: {language}",
    },
}


def get_prompt(key: PromptKey, language: str = FALLBACK_LANGUAGE, /, **params) -> str:
    """Prompt text in `language`, falling back to English. `params` fill placeholders."""
    texts = PROMPT_TEXTS[key]
    text = texts.get(language) or texts[FALLBACK_LANGUAGE]
    if params:
        text = text.format(**params)
    return text


def language_menu(languages: Sequence[str]) -> str:
    return "\n".join(
        f"{position}. {LANGUAGE_NAMES.get(code, code)}"
        for position, code in enumerate(languages, start=1)
    )


def welcome_prompt(languages: Sequence[str]) -> str:
    """The language-step prompt: multilingual greeting plus the numbered menu."""
    return get_prompt(PromptKey.LANGUAGE, menu=language_menu(languages))
