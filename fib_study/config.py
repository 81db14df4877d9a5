"""
Configuration settings for the FIB Study application.
"""

import os


class Config:
    """Configuration class for application settings."""

    # Question settings
    DEFAULT_QUESTION_TYPE = "RWFIB"
    IMPORT_FORMATS = [".csv"]

    # Document store settings
    STORE_BACKEND = os.environ.get("FIB_STORE", "memory")  # "memory" or "firestore"
    GOOGLE_CLOUD_PROJECT = os.environ.get("GOOGLE_CLOUD_PROJECT")
    FIRESTORE_DATABASE = os.environ.get("FIRESTORE_DATABASE", "(default)")
    QUESTIONS_COLLECTION = "questions"
    DICTIONARY_COLLECTION = "dictionary"

    # Review and submission settings
    REVIEW_PAGE_SIZE = 10
    SUBMIT_CHUNK_SIZE = 5

    # Translation settings (Google Cloud Translation v2)
    SOURCE_LANGUAGE = "en"
    TARGET_LANGUAGE = "vi"
    NO_TRANSLATION_TEXT = "No translation available"

    # Image search settings (Unsplash)
    UNSPLASH_API_URL = os.environ.get("UNSPLASH_API_URL", "https://api.unsplash.com")
    UNSPLASH_ACCESS_KEY = os.environ.get("UNSPLASH_ACCESS_KEY", "")
    IMAGE_PAGE_SIZE = 4
    IMAGE_ORIENTATION = "landscape"
    IMAGE_ORDER_BY = "relevant"

    # Dictionary settings (Free Dictionary API)
    DICTIONARY_API_URL = os.environ.get(
        "DICTIONARY_API_URL", "https://api.dictionaryapi.dev/api/v2/entries/en"
    )

    # HTTP settings
    HTTP_TIMEOUT = float(os.environ.get("HTTP_TIMEOUT", "10"))  # seconds

    # Web settings
    MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5MB
