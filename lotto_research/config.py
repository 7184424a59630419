import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    # empty -> sqlite file under the instance folder (see create_app)
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CACHE_TYPE = os.getenv("CACHE_TYPE", "SimpleCache")
    CACHE_DEFAULT_TIMEOUT = int(os.getenv("CACHE_DEFAULT_TIMEOUT", "600"))

    # random.org (external true-random source)
    RANDOM_ORG_URL = os.getenv("RANDOM_ORG_URL", "https://www.random.org/integers/")
    RANDOM_ORG_QUOTA_URL = os.getenv("RANDOM_ORG_QUOTA_URL", "https://www.random.org/quota/?format=plain")
    RANDOM_ORG_TIMEOUT = float(os.getenv("RANDOM_ORG_TIMEOUT", "5"))
    ENTROPY_USE_EXTERNAL = _env_bool("ENTROPY_USE_EXTERNAL", "true")

    # generation
    BALANCED_MAX_ATTEMPTS = int(os.getenv("BALANCED_MAX_ATTEMPTS", "1500"))
    OPTIMIZED_MAX_ATTEMPTS = int(os.getenv("OPTIMIZED_MAX_ATTEMPTS", "500"))
    HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "50"))  # draws used for weights
    SEED_HISTORY = _env_bool("SEED_HISTORY", "true")


class DevelopmentConfig(Config):
    DEBUG = True
    HOST = "127.0.0.1"
    PORT = 5000


class NASConfig(Config):
    DEBUG = True
    HOST = "0.0.0.0"  # 외부 접속 허용
    PORT = 8080


class ProductionConfig(Config):
    DEBUG = False
    HOST = "0.0.0.0"
    PORT = 8080


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    CACHE_TYPE = "NullCache"
    ENTROPY_USE_EXTERNAL = False
    SEED_HISTORY = True


config = {
    "development": DevelopmentConfig,
    "nas": NASConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
