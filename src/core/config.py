from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = Field("docintel-extraction", alias="APP_NAME")
    app_env: str = Field("dev", alias="APP_ENV")

    # Azure Document Intelligence
    az_di_endpoint: str | None = Field(default=None, alias="AZ_DI_ENDPOINT")
    az_di_api_key: str | None = Field(default=None, alias="AZ_DI_API_KEY")
    az_di_model_id: str = Field("prebuilt-receipt", alias="AZ_DI_MODEL_ID")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Upload limits enforced by the HTTP adapter
    max_upload_bytes: int = Field(10 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")
    allowed_content_types: str = Field(
        "application/pdf,image/jpeg,image/png,image/jpg", alias="ALLOWED_CONTENT_TYPES"
    )  # Comma-separated list

    # CORS allowed origins (comma-separated list for production deployment)
    cors_origins: str = Field("http://localhost:3000,http://127.0.0.1:3000", alias="CORS_ORIGINS")

    # Extraction
    date_dayfirst: bool = Field(True, alias="DATE_DAYFIRST")  # 03.04.2025 -> 3 April

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_azure_configured(self) -> bool:
        return bool(self.az_di_endpoint and self.az_di_api_key)

    def allowed_content_type_list(self) -> list[str]:
        return [t.strip().lower() for t in self.allowed_content_types.split(",") if t.strip()]

settings = Settings()
