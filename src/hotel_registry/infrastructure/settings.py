"""
Application settings read from the environment (and a local .env file).
"""
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Application
    APP_NAME = "Hotel Registry"

    # MongoDB
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DATABASE_NAME = os.getenv("DATABASE_NAME", "hotel_registry")
    DB_ALIAS = "core"  # Must match Hotel.meta['db_alias'].

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Subscriptions ending within this many days are flagged by the console.
    EXPIRY_WARNING_DAYS = int(os.getenv("EXPIRY_WARNING_DAYS", "14"))


settings = Settings()
