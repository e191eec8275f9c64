# config/settings.py
"""
Application configuration for the contact relay service
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent


class BaseConfig:
    """Default configuration settings"""

    # Mail relay (implicit TLS)
    SMTP_HOST = 'smtp.mail.yahoo.com'
    SMTP_PORT = 465
    MAIL_TIMEOUT = 30  # seconds
    MAIL_SUBJECT = 'Contact Us Form Submission'

    # Populated from the environment in create_app
    MAIL_SENDER_ADDRESS = None
    MAIL_SENDER_CREDENTIAL = None
    MAIL_RECIPIENT_ADDRESS = None

    # Show the transport's error text on the failure page
    EXPOSE_TRANSPORT_ERRORS = True

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_QUOTA = 100
    RATELIMIT_WINDOW_SECONDS = 15 * 60
    RATELIMIT_STORAGE_URI = 'memory://'
    RATELIMIT_MESSAGE = 'Too many requests, please try again later.'

    # Number of reverse proxies whose X-Forwarded-For is trusted
    TRUSTED_PROXY_COUNT = 0

    # Content Security Policy; the nonce source is added per request
    CSP_POLICY = {
        'default-src': ["'self'"],
        'base-uri': ["'self'"],
        'font-src': ["'self'", 'https:', 'data:'],
        'form-action': ["'self'"],
        'frame-ancestors': ["'self'"],
        'object-src': ["'none'"],
        'script-src-attr': ["'none'"],
        'script-src': ["'self'", 'https://maps.googleapis.com'],
        'style-src': ["'self'", 'https://fonts.googleapis.com', 'https://maps.googleapis.com'],
        'img-src': ["'self'", 'data:', 'https://maps.googleapis.com'],
        'frame-src': ["'self'", 'https://www.google.com'],
        'connect-src': ["'self'", 'https://maps.googleapis.com'],
        'upgrade-insecure-requests': [],
    }

    REFERRER_POLICY = 'no-referrer-when-downgrade'

    # Baseline hardening headers
    SECURITY_HEADERS = {
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'SAMEORIGIN',
        'X-XSS-Protection': '0',
        'Strict-Transport-Security': 'max-age=15552000; includeSubDomains',
        'X-DNS-Prefetch-Control': 'off',
        'X-Download-Options': 'noopen',
        'X-Permitted-Cross-Domain-Policies': 'none',
        'Cross-Origin-Opener-Policy': 'same-origin',
        'Cross-Origin-Resource-Policy': 'same-origin',
        'Origin-Agent-Cluster': '?1',
    }

    # Static site
    PUBLIC_DIR = str(BASE_DIR / 'public')

    # Logging
    LOG_LEVEL = 'INFO'
    LOG_FILE = None

    PORT = 3000
    VERSION = '1.0.0'


class DevelopmentConfig(BaseConfig):
    """Local development settings"""

    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(BaseConfig):
    """Settings used by the test suite"""

    TESTING = True
    MAIL_TIMEOUT = 5


CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': BaseConfig,
}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def environment_overrides() -> dict:
    """
    Read process environment once at startup

    Mail settings are passed through as-is (possibly None); their absence is
    reported when a submission is dispatched, not here.
    """
    overrides = {
        'MAIL_SENDER_ADDRESS': os.environ.get('YAHOO_EMAIL'),
        'MAIL_SENDER_CREDENTIAL': os.environ.get('YAHOO_PASSWORD'),
        'MAIL_RECIPIENT_ADDRESS': os.environ.get('RECIPIENT_EMAIL'),
        'PORT': int(os.environ.get('PORT', BaseConfig.PORT)),
        'VERSION': os.environ.get('APP_VERSION', BaseConfig.VERSION),
        'TRUSTED_PROXY_COUNT': int(os.environ.get('TRUSTED_PROXY_COUNT', 0)),
        'EXPOSE_TRANSPORT_ERRORS': _env_flag('EXPOSE_TRANSPORT_ERRORS', True),
    }

    for key in ('LOG_LEVEL', 'LOG_FILE'):
        if os.environ.get(key):
            overrides[key] = os.environ[key]

    return overrides
