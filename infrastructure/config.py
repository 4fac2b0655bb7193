"""Application configuration, read from the environment"""
import os

# "memory" keeps everything in process, "sql" uses DATABASE_URL
STORAGE_BACKEND = os.getenv("HOTEL_STORAGE", "memory").lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hotel.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
