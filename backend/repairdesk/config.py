# backend/repairdesk/config.py
from __future__ import annotations
import os


def _csv(value: str) -> set[str]:
    return {part.strip() for part in value.split(",") if part.strip()}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/repairdesk.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///repairdesk.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Frontend dev servers allowed to call the API
    CORS_ORIGINS = _csv(os.environ.get(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:9002",
    ))

    # Dashboard suggestion box
    SEARCH_SUGGESTION_LIMIT = int(os.environ.get("SEARCH_SUGGESTION_LIMIT", "5"))
    SEARCH_SUGGESTION_MIN_LENGTH = int(os.environ.get("SEARCH_SUGGESTION_MIN_LENGTH", "2"))

    DEFAULT_STORE = os.environ.get("DEFAULT_STORE", "EASTWOOD")

    # Invoice/receipt header per shop
    STORES = {
        "EASTWOOD": {
            "name": "PHONE MECHANIC",
            "abn": "50 629 357 937",
            "address_lines": [
                "Shop C3A Eastwood Shopping Centre",
                "160 Rowe Street, EASTWOOD NSW 2122",
            ],
            "email": "info@phonemechanic.com.au",
            "website": "www.PhoneMechanic.com.au",
            "phones": ["0450779688", "0414640101"],
        },
        "PARRAMATTA": {
            "name": "PHONE MECHANIC PARRAMATTA",
            "abn": "50 629 357 937",
            "address_lines": [],
            "email": "info@phonemechanic.com.au",
            "website": "www.PhoneMechanic.com.au",
            "phones": ["0414640101"],
        },
    }
