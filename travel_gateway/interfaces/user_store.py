# interfaces/user_store.py
"""
User Store for registration and login
Keeps users in memory with salted password hashes
"""

import hashlib
import hmac
import re
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
from loguru import logger


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")
SPECIAL_CHARS = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")

PBKDF2_ITERATIONS = 200_000


class UserExistsError(ValueError):
    """Email is already registered"""


@dataclass
class User:
    first_name: str
    last_name: str
    email: str
    phone: str
    password_hash: str = field(repr=False)
    salt: str = field(repr=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), PBKDF2_ITERATIONS)
    return digest.hex()


def validate_registration(first_name: str, last_name: str, email: str, phone: str, password: str) -> List[str]:
    """
    Check registration fields with the same rules as the signup form

    Returns:
        List of problems, empty when the registration is valid
    """
    problems = []

    if len(first_name.strip()) < 2:
        problems.append("First name must have at least 2 characters")
    if len(last_name.strip()) < 2:
        problems.append("Last name must have at least 2 characters")
    if not EMAIL_PATTERN.match(email):
        problems.append("Email is not valid")
    if not PHONE_PATTERN.match(phone):
        problems.append("Phone must have 10 to 15 digits")

    password_rules = [
        len(password) >= 8,
        re.search(r"[A-Z]", password),
        re.search(r"[a-z]", password),
        re.search(r"[0-9]", password),
        SPECIAL_CHARS.search(password),
    ]
    if not all(password_rules):
        problems.append(
            "Password needs at least 8 characters with upper and lower case letters, "
            "a number and a special character"
        )

    return problems


class UserStore:
    """
    Registered users keyed by lowercased email.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def _key(self, email: str) -> str:
        return email.strip().lower()

    def register(self, first_name: str, last_name: str, email: str, phone: str, password: str) -> User:
        """
        Register a new user

        Raises:
            ValueError: if a field is invalid
            UserExistsError: if the email is already registered
        """
        problems = validate_registration(first_name, last_name, email, phone, password)
        if problems:
            raise ValueError("; ".join(problems))

        salt = secrets.token_hex(16)
        user = User(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email.strip(),
            phone=phone,
            password_hash=hash_password(password, salt),
            salt=salt,
        )

        key = self._key(email)
        with self._lock:
            if key in self._users:
                raise UserExistsError(f"Email already registered: {email}")
            self._users[key] = user

        logger.info(f"Registered user: {user.email}")
        return user

    def get(self, email: str) -> Optional[User]:
        return self._users.get(self._key(email))

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user if the password matches, None otherwise"""
        user = self.get(email)
        if user is None:
            logger.info("Login failed: unknown email")
            return None

        if not hmac.compare_digest(hash_password(password, user.salt), user.password_hash):
            logger.info(f"Login failed: wrong password for {user.email}")
            return None

        logger.info(f"Login succeeded: {user.email}")
        return user

    def count(self) -> int:
        return len(self._users)
