"""
SkillUp Configuration
Database, auth cookie and payment provider settings
"""

import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def get_mongo_url() -> str:
    env_url = os.getenv("MONGO_URL")
    if env_url:
        return env_url

    user = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD") or os.getenv("BD_KEY")
    host = os.getenv("DB_HOST")
    if user and password and host:
        return f"mongodb+srv://{quote_plus(user)}:{quote_plus(password)}@{host}/?retryWrites=true&w=majority"

    return "mongodb://localhost:27017"


# MongoDB
MONGO_URL = get_mongo_url()
DB_NAME = os.getenv("DB_NAME", "skillup")

# Auth cookie
ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "dev-secret-key-change-me")
ALGORITHM = "HS256"
TOKEN_EXPIRE_DAYS = int(os.getenv("TOKEN_EXPIRE_DAYS", "15"))
TOKEN_COOKIE_NAME = "token"

# production flips the cookie to secure + SameSite=None for the cross-site frontend
APP_ENV = os.getenv("APP_ENV") or os.getenv("NODE_ENV", "development")
IS_PRODUCTION = APP_ENV == "production"

# Payment provider
RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY_ID", "")
RAZORPAY_KEY_SECRET = os.getenv("RAZORPAY_KEY_SECRET", "")
PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "USD")

# HTTP
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    "https://skillup-66.netlify.app",
    "http://localhost:5173",
    "http://localhost:5174",
]
if os.getenv("ALLOWED_ORIGINS"):
    CORS_ORIGINS.extend(
        origin.strip() for origin in os.getenv("ALLOWED_ORIGINS").split(",") if origin.strip()
    )
