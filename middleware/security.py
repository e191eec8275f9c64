# middleware/security.py
"""
Security Middleware for Request Processing
"""

import logging

from flask import Flask, Response, current_app, g
from flask_limiter.util import get_remote_address

from core.rate_limiter import RateLimiter
from core.security_policy import SecurityContext, security_header_set

logger = logging.getLogger(__name__)


def current_security_context() -> SecurityContext:
    """Security context of the active request, created on first use"""
    if 'security_context' not in g:
        g.security_context = SecurityContext.generate()
    return g.security_context


def rate_limit_gate():
    """Reject the request once its client has used up the window quota"""
    limiter: RateLimiter = current_app.extensions['rate_limiter']
    key = get_remote_address()

    allowed, limit_info = limiter.check(key)
    g.rate_limit_info = limit_info

    if not allowed:
        logger.debug(f"Rate limit exceeded for {key}")
        response = Response(current_app.config['RATELIMIT_MESSAGE'], status=429, mimetype='text/plain')
        response.headers['Retry-After'] = str(limit_info['reset_in'])
        return response

    return None


def attach_security_context():
    """Create a fresh nonce before any view runs"""
    g.security_context = SecurityContext.generate()


def security_headers(response):
    """Add CSP, referrer policy and hardening headers to all responses"""
    context = current_security_context()

    for name, value in security_header_set(current_app.config, context).items():
        response.headers[name] = value

    limit_info = g.get('rate_limit_info')
    if limit_info:
        response.headers['X-RateLimit-Limit'] = str(limit_info['limit'])
        response.headers['X-RateLimit-Remaining'] = str(limit_info['remaining'])

    return response


def init_security(app: Flask) -> RateLimiter:
    """
    Register the rate-limit gate and security headers on every route

    The gate runs first, so rejected requests never reach a view.
    """
    limiter = RateLimiter.from_config(app.config)
    app.extensions['rate_limiter'] = limiter

    if app.config.get('RATELIMIT_ENABLED', True):
        app.before_request(rate_limit_gate)
    else:
        app.logger.warning("Rate limiting disabled by configuration")

    app.before_request(attach_security_context)
    app.after_request(security_headers)

    return limiter
