"""
Travel Gateway Configuration
Loads settings from environment variables
"""

import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment"""

    # Amadeus Configuration (travel data API)
    AMADEUS_BASE_URL: str = os.getenv("AMADEUS_BASE_URL", "https://test.api.amadeus.com")
    AMADEUS_TOKEN_PATH: str = os.getenv("AMADEUS_TOKEN_PATH", "/v1/security/oauth2/token")
    AMADEUS_CLIENT_ID: str = os.getenv("AMADEUS_CLIENT_ID", "")
    AMADEUS_CLIENT_SECRET: str = os.getenv("AMADEUS_CLIENT_SECRET", "")

    # Mistral Configuration (chat completions, OpenAI-compatible)
    MISTRAL_API_KEY: str = os.getenv("MISTRAL_API_KEY", "")
    MISTRAL_BASE_URL: str = os.getenv("MISTRAL_BASE_URL", "https://api.mistral.ai/v1")
    MISTRAL_MODEL: str = os.getenv("MISTRAL_MODEL", "mistral-tiny")

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
    TOKEN_EXPIRY_MARGIN_SECONDS: int = int(os.getenv("TOKEN_EXPIRY_MARGIN_SECONDS", "60"))

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8080"))
    API_ENV: str = os.getenv("API_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Configuration
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def missing_secrets(self) -> List[str]:
        """
        Names of required secrets that are not configured

        Returns:
            List of setting names with empty values
        """
        required = {
            "AMADEUS_CLIENT_ID": self.AMADEUS_CLIENT_ID,
            "AMADEUS_CLIENT_SECRET": self.AMADEUS_CLIENT_SECRET,
            "MISTRAL_API_KEY": self.MISTRAL_API_KEY,
        }
        return [name for name, value in required.items() if not value]


# Global settings instance
settings = Settings()
