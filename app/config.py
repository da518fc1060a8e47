import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings read from the environment"""

    def __init__(self):
        self.app_name = os.getenv("APP_NAME", "Photo Contest")
        self.app_version = os.getenv("APP_VERSION", "1.0.0")
        self.debug = os.getenv("DEBUG", "True").lower() == "true"
        self.port = int(os.getenv("PORT", "5000"))
        self.backend_url = os.getenv("BACKEND_URL", f"http://localhost:{self.port}")
        self.frontend_url = os.getenv("FRONTEND_URL", "http://localhost:5173")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Database
        self.mongodb_url = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
        self.database_name = os.getenv("DATABASE_NAME", "photocontest")

        # Tokens
        self.secret_key = os.getenv("SECRET_KEY")
        self.algorithm = os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

        # Seeded superadmin
        self.super_admin_password = os.getenv("SUPER_ADMIN_PASSWORD", "superadmin123")

        # Asset storage
        self.storage_backend = os.getenv("STORAGE_BACKEND", "local").lower()
        self.upload_dir = os.getenv("UPLOAD_DIR", "uploads")
        self.max_upload_size = int(os.getenv("MAX_UPLOAD_SIZE_MB", "10")) * 1024 * 1024
        self.aws_access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
        self.aws_secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
        self.aws_region = os.getenv("AWS_REGION")
        self.aws_bucket_name = os.getenv("AWS_BUCKET_NAME")


settings = Settings()
