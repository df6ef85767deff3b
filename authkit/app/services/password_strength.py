"""
Password Strength Evaluator

Pure functions, no I/O.

evaluate() gates registration and password reset and reports every failed
rule at once. score() is advisory only and drives the strength meter.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

MIN_LENGTH = 12
MAX_LENGTH = 128
PERSONAL_INFO_MIN_LENGTH = 3

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

COMMON_PATTERNS = (
    "password",
    "123456",
    "qwerty",
    "azerty",
    "admin",
    "login",
    "user",
    "test",
    "guest",
    "welcome",
    "letmein",
    "monkey",
    "dragon",
    "master",
    "shadow",
    "superman",
    "batman",
    "football",
    "baseball",
    "basketball",
    "soccer",
    "princess",
    "sunshine",
    "iloveyou",
    "trustno1",
    "starwars",
)

_REPEATED_RUN = re.compile(r"(.)\1{2,}")


class PasswordRule(str, Enum):
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    DIGIT = "digit"
    SPECIAL = "special"
    REPEATED = "repeated"
    SEQUENTIAL = "sequential"
    COMMON = "common"
    PERSONAL_INFO = "personal_info"


RULE_MESSAGES = {
    PasswordRule.MIN_LENGTH: f"at least {MIN_LENGTH} characters",
    PasswordRule.MAX_LENGTH: f"at most {MAX_LENGTH} characters",
    PasswordRule.UPPERCASE: "at least one uppercase letter",
    PasswordRule.LOWERCASE: "at least one lowercase letter",
    PasswordRule.DIGIT: "at least one digit",
    PasswordRule.SPECIAL: "at least one special character",
    PasswordRule.REPEATED: "no more than 2 identical consecutive characters",
    PasswordRule.SEQUENTIAL: "no character sequences (abc, 123, etc.)",
    PasswordRule.COMMON: "no common passwords or patterns",
    PasswordRule.PERSONAL_INFO: "no personal information (name or email)",
}


@dataclass
class PasswordEvaluation:
    valid: bool
    failed_rules: List[PasswordRule] = field(default_factory=list)

    @property
    def reasons(self) -> List[str]:
        return [RULE_MESSAGES[rule] for rule in self.failed_rules]

    @property
    def message(self) -> str:
        if self.valid:
            return "Password is valid"
        return "Password must contain: " + ", ".join(self.reasons)


@dataclass
class PasswordScore:
    score: int
    feedback: List[str]
    is_strong: bool


def _has_upper(password: str) -> bool:
    return any("A" <= c <= "Z" for c in password)


def _has_lower(password: str) -> bool:
    return any("a" <= c <= "z" for c in password)


def _has_digit(password: str) -> bool:
    return any("0" <= c <= "9" for c in password)


def _has_special(password: str) -> bool:
    return any(c in SPECIAL_CHARACTERS for c in password)


def has_repeated_run(password: str) -> bool:
    return _REPEATED_RUN.search(password) is not None


def has_sequential_run(password: str) -> bool:
    """True when 3+ consecutive characters have strictly ascending codes (abc, 123)."""
    for i in range(len(password) - 2):
        a, b, c = (ord(ch) for ch in password[i : i + 3])
        if b == a + 1 and c == b + 1:
            return True
    return False


def has_common_pattern(password: str) -> bool:
    lowered = password.lower()
    return any(pattern in lowered for pattern in COMMON_PATTERNS)


def has_personal_info(
    password: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> bool:
    lowered = password.lower()
    candidates = [first_name, last_name]
    if email:
        candidates.append(email)
        candidates.append(email.split("@", 1)[0])

    for value in candidates:
        if not value:
            continue
        value = value.strip().lower()
        if len(value) >= PERSONAL_INFO_MIN_LENGTH and value in lowered:
            return True
    return False


def evaluate(
    password: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> PasswordEvaluation:
    """Check every complexity rule and collect all failures."""
    password = password or ""
    failed = []

    if len(password) < MIN_LENGTH:
        failed.append(PasswordRule.MIN_LENGTH)
    if len(password) > MAX_LENGTH:
        failed.append(PasswordRule.MAX_LENGTH)
    if not _has_upper(password):
        failed.append(PasswordRule.UPPERCASE)
    if not _has_lower(password):
        failed.append(PasswordRule.LOWERCASE)
    if not _has_digit(password):
        failed.append(PasswordRule.DIGIT)
    if not _has_special(password):
        failed.append(PasswordRule.SPECIAL)
    if has_repeated_run(password):
        failed.append(PasswordRule.REPEATED)
    if has_sequential_run(password):
        failed.append(PasswordRule.SEQUENTIAL)
    if has_common_pattern(password):
        failed.append(PasswordRule.COMMON)
    if has_personal_info(password, email, first_name, last_name):
        failed.append(PasswordRule.PERSONAL_INFO)

    return PasswordEvaluation(valid=not failed, failed_rules=failed)


def score(password: str) -> PasswordScore:
    """Additive 0..10 strength score with feedback. Never blocks anything."""
    password = password or ""
    feedback = []
    points = 0

    if len(password) >= MIN_LENGTH:
        points += 2
    elif len(password) >= 8:
        points += 1
    else:
        feedback.append(f"Use at least {MIN_LENGTH} characters")

    if _has_upper(password):
        points += 1
    else:
        feedback.append("Add uppercase letters")

    if _has_lower(password):
        points += 1
    else:
        feedback.append("Add lowercase letters")

    if _has_digit(password):
        points += 1
    else:
        feedback.append("Add digits")

    if _has_special(password):
        points += 1
    else:
        feedback.append("Add special characters")

    if password and len(set(password)) >= len(password) * 0.7:
        points += 1

    if has_repeated_run(password):
        points -= 1
        feedback.append("Avoid repeated characters")

    is_strong = points >= 6 and not feedback
    return PasswordScore(
        score=max(0, min(10, points)), feedback=feedback, is_strong=is_strong
    )


def strength_label(value: int) -> str:
    if value >= 8:
        return "Very strong"
    if value >= 6:
        return "Strong"
    if value >= 4:
        return "Medium"
    if value >= 2:
        return "Weak"
    return "Very weak"
