"""
Configuration management for the punchcard back office.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class BaseConfig:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Staff session tokens
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-jwt-secret-change-in-production')
    JWT_EXPIRY_HOURS = int(os.getenv('JWT_EXPIRY_HOURS', '8'))
    AUTH_COOKIE_NAME = 'token'

    # Punchcard program
    PUNCHCARD_CAPACITY = int(os.getenv('PUNCHCARD_CAPACITY', '10'))

    # Shopify customer sync
    SHOPIFY_STORE_URL = os.getenv('SHOPIFY_STORE_URL', '')
    SHOPIFY_ACCESS_TOKEN = os.getenv('SHOPIFY_ACCESS_TOKEN', '')
    SHOPIFY_API_VERSION = os.getenv('SHOPIFY_API_VERSION', '2024-01')
    SHOPIFY_TIMEOUT = float(os.getenv('SHOPIFY_TIMEOUT', '30'))
    SHOPIFY_SYNC_PAGE_SIZE = int(os.getenv('SHOPIFY_SYNC_PAGE_SIZE', '250'))

    # Email (SendGrid)
    SENDGRID_API_KEY = os.getenv('SENDGRID_API_KEY', '')
    EMAIL_FROM = os.getenv('EMAIL_FROM', 'noreply@example.com')
    EMAIL_FROM_NAME = os.getenv('EMAIL_FROM_NAME', 'Loyalty Team')

    # Social engagement webhook
    WEBHOOK_SECRET = os.getenv('WEBHOOK_SECRET', '')

    # Bootstrap manager account (flask setup create-admin)
    DEFAULT_ADMIN_EMAIL = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@example.com')
    DEFAULT_ADMIN_PASSWORD = os.getenv('DEFAULT_ADMIN_PASSWORD', 'admin123')

    # Staff frontend origins (comma separated)
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://localhost:5173').split(',')
        if origin.strip()
    ]


class DevelopmentConfig(BaseConfig):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        'sqlite:///punchcard_dev.db'  # SQLite fallback for local dev
    )


class ProductionConfig(BaseConfig):
    """Production configuration."""
    DEBUG = False

    _db_url = os.getenv('DATABASE_URL', '')
    if _db_url.startswith('postgres://'):
        # SQLAlchemy requires postgresql:// not postgres://
        _db_url = _db_url.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_DATABASE_URI = _db_url

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 5,
        'pool_recycle': 300,
        'pool_pre_ping': True,  # Verify connections before using
    }

    _secret_key = os.getenv('SECRET_KEY', '')
    _jwt_secret_key = os.getenv('JWT_SECRET_KEY', '')

    @classmethod
    def validate_secrets(cls) -> None:
        """
        Validate SECRET_KEY and JWT_SECRET_KEY in production.

        Raises:
            RuntimeError: If a key is missing, too short, or looks like a placeholder
        """
        for name, value in (('SECRET_KEY', cls._secret_key), ('JWT_SECRET_KEY', cls._jwt_secret_key)):
            if not value:
                raise RuntimeError(
                    f"CRITICAL: {name} environment variable is not set!\n"
                    "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )

            lower_key = value.lower()
            for pattern in ('dev', 'change', 'default', 'test', 'password'):
                if pattern in lower_key:
                    raise RuntimeError(
                        f"CRITICAL: {name} contains '{pattern}' which suggests it's not secure!"
                    )

            if len(value) < 32:
                raise RuntimeError(
                    f"CRITICAL: {name} is too short (minimum 32 characters required)!"
                )

    SECRET_KEY = _secret_key
    JWT_SECRET_KEY = _jwt_secret_key


class TestingConfig(BaseConfig):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'testing-jwt-secret'
    SHOPIFY_STORE_URL = 'test-shop.myshopify.com'
    SHOPIFY_ACCESS_TOKEN = 'shpat_test_token'
    SENDGRID_API_KEY = ''
    WEBHOOK_SECRET = 'test-webhook-secret'


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


def get_config(config_name: str = 'development'):
    """Get configuration class by name."""
    return config_map.get(config_name, DevelopmentConfig)


def validate_config(config_name: str = 'development') -> None:
    """
    Validate configuration before app startup.

    Raises:
        RuntimeError: If validation fails in production
    """
    if config_name == 'production':
        ProductionConfig.validate_secrets()
