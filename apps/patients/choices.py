"""
Enumerated patient profile values, shared by the profile model and the
onboarding field parsers.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Language(models.TextChoices):
    ENGLISH = 'en', _('English')
    HINDI = 'hi', _('Hindi')
    KANNADA = 'kn', _('Kannada')
    TELUGU = 'te', _('Telugu')


class Gender(models.TextChoices):
    MALE = 'male', _('Male')
    FEMALE = 'female', _('Female')
    OTHER = 'other', _('Other / Prefer not to say')


class DiabetesType(models.TextChoices):
    TYPE_1 = 'type_1', _('Type 1')
    TYPE_2 = 'type_2', _('Type 2')
    GESTATIONAL = 'gestational', _('Gestational')
    OTHER = 'other', _('Other / Not sure')


class MedicationType(models.TextChoices):
    TABLETS = 'tablets', _('Tablets')
    INSULIN = 'insulin', _('Insulin')
    BOTH = 'both', _('Tablets and insulin')
    NONE = 'none', _('No medication')


class DietPreference(models.TextChoices):
    VEGETARIAN = 'vegetarian', _('Vegetarian')
    NON_VEGETARIAN = 'non_vegetarian', _('Non-vegetarian')
    EGGETARIAN = 'eggetarian', _('Eggetarian')
    VEGAN = 'vegan', _('Vegan')


# Free-text list fields record this single entry when nothing is recognised
NONE_ENTRY = 'None'

# HbA1c answer meaning "patient does not know"; stored as NULL on the profile
UNKNOWN_HBA1C = 'unknown'
