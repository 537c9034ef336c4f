"""Constants for Campus Gaming Network.

This module centralizes the limits, option tables and default values shared by
the validators, mappers and document builders.
"""

from datetime import date


# Length limits
MIN_PASSWORD_LENGTH = 6
MAX_DEFAULT_STRING_LENGTH = 255
MAX_BIO_LENGTH = 2500
MAX_DESCRIPTION_LENGTH = 300

# Game list limits
MAX_FAVORITE_GAME_LIST = 5
MAX_CURRENTLY_PLAYING_LIST = 5

# Student status options (value, label)
STUDENT_STATUS_OPTIONS = [
    {"value": "freshman", "label": "Freshman"},
    {"value": "sophomore", "label": "Sophomore"},
    {"value": "junior", "label": "Junior"},
    {"value": "senior", "label": "Senior"},
    {"value": "grad", "label": "Graduate Student"},
    {"value": "alumni", "label": "Alumni"},
    {"value": "faculty", "label": "Faculty"},
    {"value": "other", "label": "Other"},
]
STATUS_VALUES = [option["value"] for option in STUDENT_STATUS_OPTIONS]
STATUS_LABELS = {option["value"]: option["label"] for option in STUDENT_STATUS_OPTIONS}

# Timezone options shown on the profile form (value, label)
TIMEZONES = [
    {"value": "Pacific/Honolulu", "label": "Hawaii Time"},
    {"value": "America/Anchorage", "label": "Alaska Time"},
    {"value": "America/Los_Angeles", "label": "Pacific Time"},
    {"value": "America/Phoenix", "label": "Arizona Time"},
    {"value": "America/Denver", "label": "Mountain Time"},
    {"value": "America/Chicago", "label": "Central Time"},
    {"value": "America/New_York", "label": "Eastern Time"},
    {"value": "America/Halifax", "label": "Atlantic Time"},
    {"value": "America/St_Johns", "label": "Newfoundland Time"},
    {"value": "America/Sao_Paulo", "label": "Brasilia Time"},
    {"value": "UTC", "label": "Coordinated Universal Time"},
    {"value": "Europe/London", "label": "British Time"},
    {"value": "Europe/Paris", "label": "Central European Time"},
    {"value": "Europe/Athens", "label": "Eastern European Time"},
    {"value": "Europe/Moscow", "label": "Moscow Time"},
    {"value": "Asia/Dubai", "label": "Gulf Time"},
    {"value": "Asia/Kolkata", "label": "India Time"},
    {"value": "Asia/Shanghai", "label": "China Time"},
    {"value": "Asia/Tokyo", "label": "Japan Time"},
    {"value": "Australia/Sydney", "label": "Australian Eastern Time"},
    {"value": "Pacific/Auckland", "label": "New Zealand Time"},
]
TIMEZONE_VALUES = [option["value"] for option in TIMEZONES]

# Birthdate parts
MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
DAYS = list(range(1, 32))
YEARS = list(range(date.today().year, date.today().year - 101, -1))

# Social and web accounts shown on a profile (field, label)
ACCOUNTS = {
    "website": "Website",
    "twitter": "Twitter",
    "twitch": "Twitch",
    "youtube": "YouTube",
    "skype": "Skype",
    "discord": "Discord",
    "battlenet": "Battlenet",
    "steam": "Steam",
    "xbox": "Xbox",
    "psn": "PSN",
}

BASE_USER = {
    "status": "",
    "major": "",
    "minor": "",
    "bio": "",
    "timezone": "",
    "hometown": "",
    "birthdate": None,
    "website": "",
    "twitter": "",
    "twitch": "",
    "youtube": "",
    "skype": "",
    "discord": "",
    "battlenet": "",
    "steam": "",
    "xbox": "",
    "psn": "",
    "favoriteGames": [],
    "currentlyPlaying": [],
}
