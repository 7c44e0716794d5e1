import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Blob storage for owner uploads (logos, hero backgrounds, gallery images)
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    PUBLIC_UPLOAD_PREFIX = os.getenv("PUBLIC_UPLOAD_PREFIX", "/uploads")
    MAX_UPLOAD_BYTES = 5 * 1024 * 1024

    # Hosts that serve the platform itself and never resolve to a custom domain
    ROOT_DOMAINS = tuple(
        host.strip()
        for host in os.getenv("ROOT_DOMAINS", "localhost,127.0.0.1").split(",")
        if host.strip()
    )

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///sitebuilder-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length"
    ROOT_DOMAINS = ("localhost",)

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
