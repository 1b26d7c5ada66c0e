# passguard/config.py
"""Configuration for the Passguard password policy engine
Defaults mirror the out-of-the-box password policy; every value can be
overridden per environment.
"""
import os
import secrets


class Config:
    """Base configuration with secure defaults"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///passguard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR')

    # Default password policy (camelCase keys are the exported wire form)
    PASSWORD_POLICY_DEFAULTS = {
        'minLength': 12,
        'maxLength': 128,
        'requireUppercase': True,
        'requireLowercase': True,
        'requireNumbers': True,
        'requireSpecialChars': True,
        'minSpecialChars': 2,
        'preventCommonPasswords': True,
        'preventUserInfo': True,
        'preventReuse': 5,
        'maxAge': 90,
        'warningDays': 14,
        'lockoutAttempts': 5,
        'lockoutDuration': 30,
    }

    # History digests: 'pbkdf2' or 'bcrypt'
    HISTORY_HASH_SCHEME = os.environ.get('HISTORY_HASH_SCHEME', 'pbkdf2')
    PBKDF2_ITERATIONS = 600000
    BCRYPT_ROUNDS = 12

    # Generator
    GENERATOR_DEFAULT_LENGTH = 16
    GENERATOR_MAX_ATTEMPTS = 100

    # Admin audit trail retention
    POLICY_AUDIT_LIMIT = 100


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Require secure environment variables in production
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True

    # Use in-memory database for tests
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # Faster hashing for tests
    PBKDF2_ITERATIONS = 1000
    BCRYPT_ROUNDS = 4


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
