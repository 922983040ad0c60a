"""English and Persian strings: emotion labels and user-facing messages."""

from __future__ import annotations

from .models import Emotion

DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "fa": "Persian (Farsi)",
}

EMOTION_LABELS: dict[str, dict[Emotion, str]] = {
    "en": {
        Emotion.HAPPY: "Happy",
        Emotion.EXCITED: "Excited",
        Emotion.NEUTRAL: "Neutral",
        Emotion.SAD: "Sad",
        Emotion.ANGRY: "Angry",
        Emotion.FRUSTRATED: "Frustrated",
    },
    "fa": {
        Emotion.HAPPY: "خوشحال",
        Emotion.EXCITED: "هیجان‌زده",
        Emotion.NEUTRAL: "خنثی",
        Emotion.SAD: "غمگین",
        Emotion.ANGRY: "عصبانی",
        Emotion.FRUSTRATED: "ناامید",
    },
}

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "dataImported": "Data imported successfully.",
        "importNoNew": "No new entries found in the file.",
        "invalidData": "Invalid data file.",
        "importProfileAddedDesc": "Data for profile '{name}' was imported. Switch to this profile now?",
        "dataDeleted": "Selected data has been deleted.",
        "insightEmptySummary": "No entries to analyze yet.",
        "insightEmptyAdvice": "Start logging your emotions to get AI-powered insights.",
        "insightErrorSummary": "Could not generate analysis at this time.",
        "insightErrorPattern": "Error connecting to AI service.",
        "insightErrorAdvice": "Please try again later.",
    },
    "fa": {
        "dataImported": "اطلاعات با موفقیت وارد شد.",
        "importNoNew": "مورد جدیدی در فایل یافت نشد.",
        "invalidData": "فایل داده نامعتبر است.",
        "importProfileAddedDesc": "اطلاعات پروفایل «{name}» وارد شد. اکنون به این پروفایل بروید؟",
        "dataDeleted": "داده‌های انتخاب‌شده حذف شدند.",
        "insightEmptySummary": "هنوز هیچ موردی برای تحلیل وجود ندارد.",
        "insightEmptyAdvice": "برای دریافت بینش هوشمند، احساسات خود را ثبت کنید.",
        "insightErrorSummary": "در حال حاضر امکان تحلیل داده‌ها وجود ندارد.",
        "insightErrorPattern": "خطا در اتصال به سرویس هوش مصنوعی.",
        "insightErrorAdvice": "لطفاً بعداً دوباره تلاش کنید.",
    },
}


def _language(language: str | None) -> str:
    return language if language in MESSAGES else DEFAULT_LANGUAGE


def emotion_label(emotion: Emotion, language: str | None = DEFAULT_LANGUAGE) -> str:
    """Localized label for an emotion, falling back to its raw value."""
    return EMOTION_LABELS[_language(language)].get(emotion, emotion.value)


def translate(key: str, language: str | None = DEFAULT_LANGUAGE, **params: str) -> str:
    """Look up a message and fill ``{placeholders}``; unknown keys come back as-is."""
    template = MESSAGES[_language(language)].get(key) or MESSAGES[DEFAULT_LANGUAGE].get(key, key)
    for name, value in params.items():
        template = template.replace("{" + name + "}", value)
    return template


def language_name(language: str | None) -> str:
    return LANGUAGE_NAMES[_language(language)]
