"""Base configuration shared by every environment."""
import os
from datetime import timedelta

class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    
    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'jwt-secret-key-change-in-production'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=8)
    JWT_ALGORITHM = 'HS256'
    
    # CORS (kiosk and teacher consoles are served from other origins)
    CORS_ORIGINS = ["*"]
    
    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL') or 'memory://'
    RATELIMIT_DEFAULT = "2000 per day, 500 per hour"
    
    # Realtime channel
    SOCKETIO_MESSAGE_QUEUE = None
    SOCKETIO_CORS_ALLOWED_ORIGINS = "*"
    
    # Pickup authorization
    PENDING_RELEASE_TTL_SECONDS = int(os.environ.get('PENDING_RELEASE_TTL_SECONDS', 900))
    PENDING_RELEASE_SWEEP_SECONDS = int(os.environ.get('PENDING_RELEASE_SWEEP_SECONDS', 5))
    
    # Enrollment
    BADGE_CODE_ATTEMPTS = 10
    
    # Listings
    HISTORY_LIMIT = 20
    DASHBOARD_RECENT_LIMIT = 5
    LESSON_PLAN_LIMIT = 50
    REPORT_WINDOW_DAYS = 30
    
    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE') or 'logs/app.log'
