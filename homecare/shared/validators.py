"""Shared validation utilities"""

import re
from datetime import time
from typing import Optional


def validate_jp_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Japanese phone number.

    Args:
        phone: Phone number string, with or without hyphens, or in +81 form

    Returns:
        Digits only, domestic form (e.g. 0312345678, 09012345678)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    # Handle +81 prefix
    if phone.strip().startswith("+81") or digits.startswith("81") and len(digits) in (11, 12):
        digits = "0" + digits[2:]

    # Landlines have 10 digits, mobiles and 050 numbers have 11
    if not digits.startswith("0") or len(digits) not in (10, 11):
        raise ValueError("Phone number must be 10 or 11 digits starting with 0")

    return digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_name(value: Optional[str]) -> Optional[str]:
    """Strip a name and reject one that is blank"""
    if value is None:
        return value

    value = value.strip()
    if not value:
        raise ValueError("Name is required")

    return value


def validate_kana(value: Optional[str]) -> Optional[str]:
    """Accept full-width katakana (with long vowel mark and spaces) only"""
    if not value:
        return value

    value = value.strip()
    if not re.fullmatch(r"[゠-ヿ　 ]+", value):
        raise ValueError("Kana name must be written in katakana")

    return value


def validate_hhmm(value: Optional[str]) -> Optional[str]:
    """Validate an HH:MM time string"""
    if value is None:
        return value

    if not re.fullmatch(r"\d{2}:\d{2}", value):
        raise ValueError("Time must be in HH:MM format")

    hours, minutes = int(value[:2]), int(value[3:])
    if hours > 23 or minutes > 59:
        raise ValueError("Time must be in HH:MM format")

    return value


def parse_hhmm(value: str) -> time:
    return time(int(value[:2]), int(value[3:]))
