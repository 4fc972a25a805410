import os
import threading

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")

        # Security: Force disable debug info in API responses (overrides DEBUG_MODE)
        # Set DISABLE_API_DEBUG_INFO=true to hide sensitive information even in development
        self.DISABLE_API_DEBUG_INFO = os.environ.get("DISABLE_API_DEBUG_INFO", "false").lower() in ["true", "1", "yes", "on"]

        # Database settings, DATABASE_URL wins over the POSTGRES_* variables
        self.POSTGRES_HOST = os.environ.get("POSTGRES_HOST", "localhost")
        self.POSTGRES_PORT = os.environ.get("POSTGRES_PORT", "5432")
        self.POSTGRES_USER = os.environ.get("POSTGRES_USER")
        self.POSTGRES_PASSWORD = os.environ.get("POSTGRES_PASSWORD")
        self.POSTGRES_DB = os.environ.get("POSTGRES_DB")
        self.DATABASE_URL = os.environ.get(
            "DATABASE_URL",
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

        # Comma separated list of allowed frontend origins
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000").split(",")
            if origin.strip()
        ]

        # Rate limit for the public sign-up route (slowapi syntax)
        self.SIGNUP_RATE_LIMIT = os.environ.get("SIGNUP_RATE_LIMIT", "10/minute")

        # Bootstrap admin, created on startup when both are set
        self.ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", None)
        self.ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", None)

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

    @property
    def include_debug_info(self) -> bool:
        return (
            self.DEBUG_MODE.lower() in ['dev', 'development', 'local']
            and not self.DISABLE_API_DEBUG_INFO
        )

settings = BackendSettings()
