import secrets
import string
from typing import List, Optional
from pydantic import BaseModel
from .exceptions import InvalidPolicy

MIN_LENGTH = 8
MAX_LENGTH = 64

SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
# guaranteed symbol is drawn from the unambiguous subset
GUARANTEED_SYMBOLS = "!@#$%^&*()_+-="


class PasswordPolicy(BaseModel):
    length: int = 16
    uppercase: bool = True
    lowercase: bool = True
    numbers: bool = True
    symbols: bool = True

    def enabled_classes(self) -> List[str]:
        classes = []
        if self.uppercase: classes.append(string.ascii_uppercase)
        if self.lowercase: classes.append(string.ascii_lowercase)
        if self.numbers:   classes.append(string.digits)
        if self.symbols:   classes.append(SYMBOLS)
        return classes


def generate_password(policy: Optional[PasswordPolicy] = None) -> str:
    policy = policy or PasswordPolicy()
    classes = policy.enabled_classes()
    if not classes:
        raise InvalidPolicy("At least one character type must be selected")
    if not MIN_LENGTH <= policy.length <= MAX_LENGTH:
        raise InvalidPolicy(f"Length must be between {MIN_LENGTH} and {MAX_LENGTH}, got {policy.length}")
    if policy.length < len(classes):
        raise InvalidPolicy(f"Length {policy.length} is too short for {len(classes)} required character types")

    charset = "".join(classes)
    password_chars = []
    for chars in classes:
        password_chars.append(secrets.choice(GUARANTEED_SYMBOLS if chars is SYMBOLS else chars))
    for _ in range(policy.length - len(password_chars)):
        password_chars.append(secrets.choice(charset))

    # Fisher-Yates
    for i in range(len(password_chars) - 1, 0, -1):
        j = secrets.randbelow(i + 1)
        password_chars[i], password_chars[j] = password_chars[j], password_chars[i]
    return "".join(password_chars)
