from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGO: str = "HS256"

    STORAGE_URL: str = "http://localhost:54321/storage/v1"
    STORAGE_API_KEY: str = ""
    DOCUMENTS_BUCKET: str = "travel-documents"
    PHOTOS_BUCKET: str = "photos"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    LOG_LEVEL: str = "INFO"
    DB_CONNECT_RETRIES: int = 5

    class Config:
        env_file = ".env"

settings = Settings()
