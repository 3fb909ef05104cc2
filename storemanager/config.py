import os

from dotenv import load_dotenv


class Config:
    """Settings read from the environment (and a local ``.env`` file)."""

    def __init__(self):
        load_dotenv()
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///storemanager.db")
        self.JWT_KEY = os.getenv("JWT_KEY")
        self.JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "24"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.PORT = int(os.getenv("PORT", "3000"))
        self.OWNER_NAME = os.getenv("OWNER_NAME", "Store Owner")
        self.OWNER_EMAIL = os.getenv("OWNER_EMAIL", "owner@storemanager.local")
        self.OWNER_PASSWORD = os.getenv("OWNER_PASSWORD")
