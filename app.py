# app.py
"""
Flask Application Factory for the Contact Relay Service

This application factory wires together:
- Environment-based configuration management
- Console and rotating-file logging
- Per-client rate limiting on every route
- Nonce-based Content Security Policy and hardening headers
- The contact form endpoint and static site routes
"""

import logging
import logging.handlers
import os
from typing import Any, Dict, Optional

import aiosmtplib
from dotenv import load_dotenv
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from config.settings import CONFIGS, environment_overrides
from middleware.security import init_security
from routes.contact import contact_bp
from routes.site import site_bp


def setup_logging(app: Flask) -> None:
    """
    Configure application logging

    This setup provides:
    - A console handler on the Flask app logger and the project's modules
    - An optional rotating log file (LOG_FILE)
    - Quieter werkzeug request logs outside debug mode
    """
    app.logger.handlers.clear()

    formatter = logging.Formatter(
        fmt='%(asctime)s %(name)-20s %(levelname)-8s %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    log_level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    log_file = app.config.get('LOG_FILE')
    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    for name in (app.logger.name, 'core', 'middleware', 'routes'):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(log_level)
        for handler in handlers:
            logger.addHandler(handler)

    if not app.debug:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)


def register_blueprints(app: Flask) -> None:
    """Register application blueprints"""
    app.register_blueprint(contact_bp)
    app.register_blueprint(site_bp)

    app.logger.info("Application blueprints registered")


def create_app(config_name: Optional[str] = None,
               overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Flask application factory

    Args:
        config_name: Configuration environment ('development', 'testing', 'production')
        overrides: Config values applied last, after environment variables

    Returns:
        Configured Flask application instance
    """
    # Static files are served by the site blueprint so they pass the rate limit
    app = Flask(__name__, static_folder=None)

    config_name = config_name or os.environ.get('APP_ENV', 'production')
    app.config.from_object(CONFIGS.get(config_name, CONFIGS['production']))

    # Environment is read once here and treated as read-only afterwards
    app.config.update(environment_overrides())
    if overrides:
        app.config.update(overrides)

    # Mail transport client class; tests swap in a fake
    app.extensions['smtp_factory'] = app.config.get('SMTP_CLIENT_FACTORY') or aiosmtplib.SMTP

    proxy_count = app.config.get('TRUSTED_PROXY_COUNT', 0)
    if proxy_count:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_count, x_proto=proxy_count)

    setup_logging(app)
    app.logger.info(f"Starting contact relay in {config_name} mode")

    init_security(app)
    register_blueprints(app)

    app.logger.info("Flask application factory completed successfully")
    return app


def main() -> None:
    load_dotenv()
    app = create_app()
    app.logger.info(f"Server is running on port {app.config['PORT']}")
    app.run(host='0.0.0.0', port=app.config['PORT'], debug=app.debug)


if __name__ == '__main__':
    main()
