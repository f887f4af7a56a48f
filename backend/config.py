"""
Settings for the stopwatch backend, read from the environment (.env supported).
"""
import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///stopwatch.db")
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Tracked people and activity categories. Sessions store the ids only.
USERS = [
    {"id": "khalid", "name": "Khalid", "color": "#4A5CDB"},
    {"id": "rio", "name": "Rio", "color": "#8A2BE2"},
]

TOPICS = [
    {"id": "studying", "name": "Studying"},
    {"id": "coding", "name": "Coding"},
]

DEFAULT_USER_COLOR = "#cccccc"


def find_user(user_id: str | None) -> dict | None:
    return next((u for u in USERS if u["id"] == user_id), None)


def find_topic(topic_id: str | None) -> dict | None:
    return next((t for t in TOPICS if t["id"] == topic_id), None)


def user_display_name(user_id: str) -> str:
    user = find_user(user_id)
    return user["name"] if user else user_id


def user_color(user_id: str) -> str:
    user = find_user(user_id)
    return user["color"] if user else DEFAULT_USER_COLOR
