import os
from datetime import timedelta


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///strengthlab.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT (tokens are issued by the auth service, we only verify them)
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'your-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    JWT_TOKEN_LOCATION = ['cookies', 'headers']
    JWT_COOKIE_SECURE = True
    JWT_COOKIE_CSRF_PROTECT = True
    JWT_COOKIE_SAMESITE = 'Lax'
    JWT_ACCESS_COOKIE_NAME = 'access_token_cookie'

    # CORS for the client-side pages calling the JSON API
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Training program layout
    BLOCK_WEEKS = 12
    SINGLE_SESSION_WEEKS = (5, 11)  # one training + one testing session
    REST_WEEKS = (6, 12)
    MONTHLY_WINDOW_WEEKS = 4

    # Read models
    LEADERBOARD_LIMIT = 50
    RECENT_TRANSACTIONS_LIMIT = 10

    # Nightly UserStat refresh (APScheduler)
    STATS_REFRESH_ENABLED = os.getenv('STATS_REFRESH_ENABLED', '0') == '1'
    STATS_REFRESH_HOUR = int(os.getenv('STATS_REFRESH_HOUR', '3'))


class DevelopmentConfig(Config):
    DEBUG = True
    JWT_COOKIE_SECURE = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'testing-secret-key-with-enough-length-for-hs256'
    JWT_TOKEN_LOCATION = ['headers']
    STATS_REFRESH_ENABLED = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
