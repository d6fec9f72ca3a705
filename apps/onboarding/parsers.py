"""
Onboarding Field Parsers
One pure function per onboarding field: raw message text in, validated value
out, or None when the text cannot be understood.

Parsers never raise. Enumerated fields accept either the numbered menu choice
shown in the prompt or a keyword in English, Hindi, Kannada or Telugu.
ASCII keywords are matched on word boundaries; Indic-script keywords are
matched as substrings because combining vowel signs break `\\b`.
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from apps.patients.choices import (
    DiabetesType, DietPreference, Gender, Language, MedicationType,
    NONE_ENTRY, UNKNOWN_HBA1C,
)

DEFAULT_LANGUAGES = ("en", "hi", "kn", "te")

KeywordTable = Sequence[Tuple[str, Sequence[str]]]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _normalise(text) -> str:
    if not isinstance(text, str):
        return ""
    return " ".join(text.strip().lower().split())


def _has_keyword(text: str, keywords: Iterable[str]) -> bool:
    for keyword in keywords:
        # "m", "f", "y", "n" only count as the whole answer ("i'm" is not "m")
        if len(keyword) == 1:
            if text == keyword:
                return True
        elif keyword.isascii():
            if re.search(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9])", text):
                return True
        elif keyword in text:
            return True
    return False


def _menu_choice(text: str, options: Sequence[str]) -> Optional[str]:
    """'2', '2.', '2)' or '(2)' -> options[1]."""
    match = re.fullmatch(r"\(?([0-9])[.)]?", text)
    if not match:
        return None
    index = int(match.group(1)) - 1
    if 0 <= index < len(options):
        return options[index]
    return None


def _match_choice(text, menu: Sequence[str], keywords: KeywordTable) -> Optional[str]:
    t = _normalise(text)
    if not t:
        return None

    choice = _menu_choice(t, menu)
    if choice is not None:
        return choice

    # Order of the keyword table matters ("non veg" before "veg")
    for value, words in keywords:
        if _has_keyword(t, words):
            return value
    return None


def _match_catalog(text, catalog: KeywordTable) -> List[str]:
    t = _normalise(text)
    found = [name for name, words in catalog if _has_keyword(t, words)]
    return found or [NONE_ENTRY]


# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

LANGUAGE_KEYWORDS: KeywordTable = (
    (Language.ENGLISH.value, ("english", "eng", "angrezi", "अंग्रेज़ी", "अंग्रेजी", "ಇಂಗ್ಲಿಷ್", "ఇంగ్లీష్")),
    (Language.HINDI.value, ("hindi", "हिंदी", "हिन्दी")),
    (Language.KANNADA.value, ("kannada", "ಕನ್ನಡ")),
    (Language.TELUGU.value, ("telugu", "తెలుగు")),
)

# Bare refusals only count as the first word: "yes, no problem" is consent
CONSENT_NO_WORDS = (
    "no", "n", "nope", "nah", "nahi", "nahin", "नहीं", "नही", "ना", "ಇಲ್ಲ", "ಬೇಡ", "లేదు", "వద్దు",
)
CONSENT_NO_PHRASES = (
    "disagree", "don't agree", "dont agree", "do not agree", "not agree", "refuse",
    "असहमत", "सहमत नहीं", "ಒಪ್ಪುವುದಿಲ್ಲ", "ఒప్పుకోను", "అంగీకరించను",
)
CONSENT_YES = (
    "yes", "y", "yeah", "yep", "agree", "i agree", "ok", "okay", "sure", "haan", "han",
    "हाँ", "हां", "सहमत", "ಹೌದು", "ಸರಿ", "ಒಪ್ಪುತ್ತೇನೆ", "అవును", "సరే", "అంగీకరిస్తున్నాను",
)

GENDER_KEYWORDS: KeywordTable = (
    (Gender.OTHER.value, (
        "other", "others", "prefer not", "transgender", "अन्य", "ಇತರ", "ఇతర",
    )),
    (Gender.FEMALE.value, (
        "female", "woman", "women", "f", "lady", "girl", "mahila",
        "महिला", "स्त्री", "औरत", "ಮಹಿಳೆ", "ಹೆಣ್ಣು", "స్త్రీ", "మహిళ",
    )),
    (Gender.MALE.value, (
        "male", "man", "men", "m", "boy", "gent", "purush",
        "पुरुष", "आदमी", "ಪುರುಷ", "ಗಂಡು", "పురుషుడు", "మగ",
    )),
)

DIABETES_TYPE_KEYWORDS: KeywordTable = (
    (DiabetesType.TYPE_1.value, (
        "type 1", "type1", "type-1", "type i", "t1", "t1d", "juvenile",
        "टाइप 1", "टाइप-1", "ಟೈಪ್ 1", "టైప్ 1",
    )),
    (DiabetesType.TYPE_2.value, (
        "type 2", "type2", "type-2", "type ii", "t2", "t2d",
        "टाइप 2", "टाइप-2", "ಟೈಪ್ 2", "టైప్ 2",
    )),
    (DiabetesType.GESTATIONAL.value, (
        "gestational", "pregnancy", "gdm", "गर्भावस्था", "ಗರ್ಭಾವಸ್ಥೆ", "గర్భధారణ",
    )),
    (DiabetesType.OTHER.value, (
        "other", "not sure", "don't know", "dont know", "unknown", "prediabetes",
        "pre-diabetes", "pre diabetes", "पता नहीं", "अन्य", "ಗೊತ್ತಿಲ್ಲ", "ಇತರ", "ఇతర", "తెలియదు",
    )),
)

NEW_DIAGNOSIS_KEYWORDS = (
    "just diagnosed", "newly diagnosed", "new", "recently", "this year", "less than a year",
    "अभी", "नया", "ಹೊಸ", "ಇತ್ತೀಚೆಗೆ", "కొత్త", "ఇటీవల",
)
MONTH_KEYWORDS = (
    "month", "months", "mahine", "mahina", "महीने", "महीना", "ತಿಂಗಳು", "ತಿಂಗಳ", "నెల", "నెలలు",
)

BOTH_KEYWORDS = ("both", "dono", "दोनों", "ಎರಡೂ", "రెండూ", "రెండు")
TABLET_KEYWORDS = (
    "tablet", "tablets", "pill", "pills", "oral", "goli", "metformin", "glimepiride",
    "गोली", "गोलियां", "ಮಾತ್ರೆ", "ಮಾತ್ರೆಗಳು", "మాత్ర", "మాత్రలు",
)
INSULIN_KEYWORDS = ("insulin", "injection", "injections", "inj", "इंसुलिन", "इन्सुलिन", "ಇನ್ಸುಲಿನ್", "ఇన్సులిన్")
NO_MEDICATION_KEYWORDS = (
    "none", "no", "nothing", "no medicine", "no medication", "not taking", "diet only",
    "कोई नहीं", "नहीं", "कुछ नहीं", "ಇಲ್ಲ", "ಯಾವುದೂ ಇಲ್ಲ", "లేదు", "ఏమీ లేదు",
)

# "no tablets", "not on insulin", "गोली नहीं"
NEGATED_MENTION = re.compile(
    r"(?<![a-z0-9])(?:no|not|without)\s+(?:(?:taking|using|on)\s+)?[^\s,.;]+"
    r"|[^\s,.;]+\s+(?:नहीं|नही|ಇಲ್ಲ|లేదు)"
)

DIET_KEYWORDS: KeywordTable = (
    (DietPreference.NON_VEGETARIAN.value, (
        "non veg", "non-veg", "nonveg", "non vegetarian", "non-vegetarian", "meat", "chicken",
        "fish", "mutton", "मांसाहारी", "नॉन वेज", "ಮಾಂಸಾಹಾರಿ", "మాంసాహారి",
    )),
    (DietPreference.VEGAN.value, ("vegan", "plant based", "plant-based")),
    (DietPreference.EGGETARIAN.value, ("eggetarian", "egg", "eggs", "अंडा", "ಮೊಟ್ಟೆ", "గుడ్డు")),
    (DietPreference.VEGETARIAN.value, (
        "veg", "vegetarian", "veggie", "pure veg", "shakahari",
        "शाकाहारी", "ಸಸ್ಯಾಹಾರಿ", "శాకాహారి",
    )),
)

MEDICINE_CATALOG: KeywordTable = (
    ("Metformin", ("metformin", "glycomet", "glucophage", "obimet", "gluformin", "मेटफॉर्मिन")),
    ("Glimepiride", ("glimepiride", "amaryl", "glimy", "glimestar")),
    ("Gliclazide", ("gliclazide", "diamicron", "glizid", "reclide")),
    ("Glibenclamide", ("glibenclamide", "glyburide", "daonil")),
    ("Sitagliptin", ("sitagliptin", "januvia", "janumet", "istavel")),
    ("Vildagliptin", ("vildagliptin", "galvus", "jalra")),
    ("Teneligliptin", ("teneligliptin", "tenepride", "teneza")),
    ("Dapagliflozin", ("dapagliflozin", "forxiga", "dapa")),
    ("Empagliflozin", ("empagliflozin", "jardiance", "empa")),
    ("Pioglitazone", ("pioglitazone", "pioz", "pioglit")),
    ("Voglibose", ("voglibose", "volix", "vogli")),
    ("Insulin Glargine", ("glargine", "lantus", "basalog", "toujeo")),
    ("Insulin Aspart", ("aspart", "novorapid")),
    ("Insulin Lispro", ("lispro", "humalog")),
    ("Insulin Degludec", ("degludec", "tresiba")),
    ("Human Insulin", ("mixtard", "actrapid", "huminsulin", "insugen", "wosulin")),
    ("Insulin", ("insulin", "इंसुलिन", "इन्सुलिन", "ಇನ್ಸುಲಿನ್", "ఇన్సులిన్")),
)

COMORBIDITY_CATALOG: KeywordTable = (
    ("Hypertension", (
        "hypertension", "high bp", "bp", "blood pressure", "high blood pressure",
        "बीपी", "ब्लड प्रेशर", "रक्तचाप", "ಬಿಪಿ", "ರಕ್ತದೊತ್ತಡ", "బీపీ", "రక్తపోటు",
    )),
    ("Heart Disease", ("heart", "cardiac", "angina", "हृदय", "दिल", "ಹೃದಯ", "గుండె")),
    ("Kidney Disease", ("kidney", "renal", "ckd", "किडनी", "गुर्दा", "ಮೂತ್ರಪಿಂಡ", "కిడ్నీ", "మూత్రపిండ")),
    ("Thyroid", ("thyroid", "hypothyroid", "hyperthyroid", "थायराइड", "ಥೈರಾಯ್ಡ್", "థైరాయిడ్")),
    ("High Cholesterol", ("cholesterol", "lipid", "lipids", "dyslipidemia", "कोलेस्ट्रॉल", "ಕೊಲೆಸ್ಟ್ರಾಲ್", "కొలెస్ట్రాల్")),
    ("Retinopathy", ("retinopathy", "eye", "eyes", "vision", "आंख", "ಕಣ್ಣು", "కన్ను")),
    ("Neuropathy", ("neuropathy", "nerve", "numbness", "tingling", "सुन्न", "ಜುಮ್ಮು", "తిమ్మిరి")),
    ("Obesity", ("obesity", "obese", "overweight", "मोटापा", "ಬೊಜ್ಜು", "ఊబకాయం")),
    ("Asthma", ("asthma", "copd", "दमा", "ಅಸ್ತಮಾ", "ఆస్తమా")),
    ("Fatty Liver", ("fatty liver", "liver", "लिवर", "ಯಕೃತ್ತು", "కాలేయ")),
)

HBA1C_UNKNOWN_KEYWORDS = (
    "don't know", "dont know", "do not know", "not known", "not sure", "unknown", "no idea",
    "never checked", "never tested", "not checked", "dk", "idk", "pata nahi",
    "पता नहीं", "मालूम नहीं", "नहीं पता", "ಗೊತ್ತಿಲ್ಲ", "ತಿಳಿದಿಲ್ಲ", "తెలియదు", "తెలీదు",
)

SKIP_KEYWORDS = ("skip", "later", "no contact", "छोड़ें", "छोड़ो", "बाद में", "ಬಿಟ್ಟುಬಿಡಿ", "ನಂತರ", "దాటవేయి", "తరువాత")


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parse_language(text, languages: Sequence[str] = DEFAULT_LANGUAGES) -> Optional[str]:
    """Menu numbers follow the configured language order."""
    keywords = [(code, words) for code, words in LANGUAGE_KEYWORDS if code in languages]
    return _match_choice(text, list(languages), keywords)


def parse_language_change(text, languages: Sequence[str] = DEFAULT_LANGUAGES) -> Optional[str]:
    """A language named anywhere in the message ("switch to hindi"). Menu numbers do not count."""
    t = _normalise(text)
    if not t:
        return None
    for code, words in LANGUAGE_KEYWORDS:
        if code in languages and _has_keyword(t, words):
            return code
    return None


def parse_name(text) -> Optional[str]:
    if not isinstance(text, str):
        return None
    name = " ".join(text.split())
    if not 2 <= len(name) <= 100:
        return None
    if any(ch.isdigit() for ch in name) or not any(ch.isalpha() for ch in name):
        return None
    return name


def parse_age(text) -> Optional[int]:
    match = re.search(r"\d+", _normalise(text))
    if not match:
        return None
    age = int(match.group())
    return age if 1 <= age <= 120 else None


def parse_phone(text) -> Optional[str]:
    """Indian mobile numbers, normalised to +91XXXXXXXXXX."""
    if not isinstance(text, str):
        return None
    digits = re.sub(r"[\s\-().]", "", text.strip())
    if digits.startswith("+"):
        digits = digits[1:]
    if re.fullmatch(r"[6-9][0-9]{9}", digits):
        return "+91" + digits
    if re.fullmatch(r"91[6-9][0-9]{9}", digits):
        return "+" + digits
    return None


def parse_pincode(text) -> Optional[str]:
    match = re.search(r"\b([0-9]{6})\b", _normalise(text))
    return match.group(1) if match else None


def parse_consent(text) -> Optional[bool]:
    t = _normalise(text)
    if not t:
        return None
    if t == "1":
        return True
    if t == "2":
        return False
    # Refusals first: "do not agree" contains "agree"
    first_word = t.split()[0].strip(".,!?;:")
    if first_word in CONSENT_NO_WORDS or _has_keyword(t, CONSENT_NO_PHRASES):
        return False
    if _has_keyword(t, CONSENT_YES):
        return True
    return None


def parse_gender(text) -> Optional[str]:
    return _match_choice(text, Gender.values, GENDER_KEYWORDS)


def parse_diabetes_type(text) -> Optional[str]:
    return _match_choice(text, DiabetesType.values, DIABETES_TYPE_KEYWORDS)


def parse_duration(text) -> Optional[float]:
    """Years since diagnosis. Months are converted; 'just diagnosed' is 0."""
    t = _normalise(text)
    if not t:
        return None

    # Each number takes the unit written right after it: "5 years 6 months"
    amounts = re.findall(r"(\d+(?:[.,]\d+)?)\s*([^\d\s,.;]*)", t)
    if not amounts:
        return 0.0 if _has_keyword(t, NEW_DIAGNOSIS_KEYWORDS) else None

    years = months = None
    for number, unit in amounts:
        value = float(number.replace(",", "."))
        if unit.startswith(MONTH_KEYWORDS):
            if months is None:
                months = value
        elif years is None:
            years = value

    total = round((years or 0.0) + (months or 0.0) / 12, 1)
    return total if 0 <= total <= 100 else None


def parse_medication_type(text) -> Optional[str]:
    t = _normalise(text)
    if not t:
        return None

    choice = _menu_choice(t, MedicationType.values)
    if choice is not None:
        return choice

    taken = NEGATED_MENTION.sub(" ", t)
    tablets = _has_keyword(taken, TABLET_KEYWORDS)
    insulin = _has_keyword(taken, INSULIN_KEYWORDS)
    if _has_keyword(taken, BOTH_KEYWORDS) or (tablets and insulin):
        return MedicationType.BOTH.value
    if insulin:
        return MedicationType.INSULIN.value
    if tablets:
        return MedicationType.TABLETS.value
    if _has_keyword(t, NO_MEDICATION_KEYWORDS):
        return MedicationType.NONE.value
    return None


def parse_medicines(text) -> List[str]:
    return _match_catalog(text, MEDICINE_CATALOG)


def parse_diet(text) -> Optional[str]:
    return _match_choice(text, DietPreference.values, DIET_KEYWORDS)


def parse_comorbidities(text) -> List[str]:
    return _match_catalog(text, COMORBIDITY_CATALOG)


def parse_hba1c(text) -> Union[float, str, None]:
    """Percentage in 3.0-20.0, or UNKNOWN_HBA1C for an explicit "don't know"."""
    t = _normalise(text)
    if not t:
        return None

    # "HbA1c 7.2" must not read the 1 in "a1c"
    numeric = re.sub(r"(?:hb)?a1c", " ", t)
    match = re.search(r"(?<![0-9.])\d{1,2}(?:[.,]\d{1,2})?(?![0-9])", numeric)
    if match:
        value = float(match.group().replace(",", "."))
        return value if 3.0 <= value <= 20.0 else None

    if _has_keyword(t, HBA1C_UNKNOWN_KEYWORDS):
        return UNKNOWN_HBA1C
    return None


def is_skip(text) -> bool:
    t = _normalise(text)
    return bool(t) and _has_keyword(t, SKIP_KEYWORDS)
