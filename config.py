"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _csv(value):
    return [item.strip().upper() for item in value.split(',') if item.strip()]


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Database - Priority: DATABASE_URL > DB_*
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        DB_HOST = os.getenv('DB_HOST', 'localhost')
        DB_PORT = os.getenv('DB_PORT', '5432')
        DB_NAME = os.getenv('DB_NAME', 'cotizador')
        DB_USER = os.getenv('DB_USER', 'cotizador')
        DB_PASSWORD = os.getenv('DB_PASSWORD', 'cotizador')

        DATABASE_URL = (
            f"postgresql://{DB_USER}:{DB_PASSWORD}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'
    DB_CREATE_ALL = os.getenv('DB_CREATE_ALL', 'false').lower() == 'true'

    # Quoting
    DEFAULT_TAX_CODES = _csv(os.getenv('DEFAULT_TAX_CODES', 'MX'))

    # Orders
    DEFAULT_FULFILLMENT_LEVEL = int(os.getenv('DEFAULT_FULFILLMENT_LEVEL', '100'))
    ORDER_DELIVERY_DAYS = int(os.getenv('ORDER_DELIVERY_DAYS', '7'))


class TestConfig(Config):
    """In-memory SQLite configuration for the test suite."""

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ECHO = False
    DB_CREATE_ALL = True
    DEFAULT_TAX_CODES = ['MX']
