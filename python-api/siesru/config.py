from pydantic_settings import BaseSettings
from typing import List, Literal, Optional

LINE_TERMINATORS = {"crlf": "\r\n", "lf": "\n"}


class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    DEBUG: bool = False

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:5173"

    # File Upload
    MAX_FILE_SIZE_MB: int = 10

    # SIE input / SRU output
    SIE_ENCODING: str = "iso-8859-1"
    SRU_ENCODING: str = "iso-8859-1"
    SRU_LINE_ENDING: Literal["crlf", "lf"] = "crlf"
    SRU_PROGRAM: str = "SIEtoSRU"
    SRU_TIMEZONE: str = "Europe/Stockholm"
    OUTPUT_DIR: str = "."

    # Not present in the SIE file, must be supplied by the user
    POSTAL_CODE: Optional[int] = None
    POSTAL_ADDRESS: Optional[str] = None

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated ALLOWED_ORIGINS string into list."""
        if not self.ALLOWED_ORIGINS or not self.ALLOWED_ORIGINS.strip():
            return ["http://localhost:5173"]

        if self.ALLOWED_ORIGINS == "*":
            return ["*"]

        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def line_terminator(self) -> str:
        """Line terminator used for both INFO.sru and BLANKETTER.sru."""
        return LINE_TERMINATORS[self.SRU_LINE_ENDING]

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024

    def validate_production_config(self) -> None:
        """Validate configuration is safe for production environment."""
        if self.ENV != "production":
            return

        if self.DEBUG:
            raise ValueError(
                "SECURITY ERROR: DEBUG=true is not allowed in production! "
                "Set DEBUG=false in environment variables."
            )

        if self.ALLOWED_ORIGINS == "*":
            raise ValueError(
                "SECURITY ERROR: CORS allows all origins (*) in production! "
                "Set ALLOWED_ORIGINS to specific domains (comma-separated)."
            )

        if any("localhost" in origin or "127.0.0.1" in origin
               for origin in self.allowed_origins_list):
            raise ValueError(
                "SECURITY ERROR: localhost origins not allowed in production! "
                "Set ALLOWED_ORIGINS to production domains only."
            )

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
