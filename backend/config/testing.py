"""Testing configuration."""
from datetime import timedelta
from .base import Config

class TestingConfig(Config):
    """Testing configuration class."""
    
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    
    # Database (in-memory SQLite for testing)
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    
    # JWT Configuration
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=5)
    
    # Rate Limiting (disabled for testing)
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = 'memory://'
    
    REDIS_URL = None
    
    PENDING_RELEASE_TTL_SECONDS = 60
    # Tests drive expiry through the registry clock
    PENDING_RELEASE_SWEEP_SECONDS = 0
    
    # Logging
    LOG_LEVEL = 'WARNING'
