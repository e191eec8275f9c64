"""Tests for CSP construction"""
from config.settings import BaseConfig
from core.security_policy import SecurityContext, build_csp, security_header_set


def _config():
    return {
        "CSP_POLICY": BaseConfig.CSP_POLICY,
        "REFERRER_POLICY": BaseConfig.REFERRER_POLICY,
        "SECURITY_HEADERS": BaseConfig.SECURITY_HEADERS,
    }


def test_nonce_is_128_bit_hex():
    context = SecurityContext.generate()

    assert len(context.nonce) == 32
    int(context.nonce, 16)


def test_nonces_are_unique():
    nonces = {SecurityContext.generate().nonce for _ in range(500)}
    assert len(nonces) == 500


def test_script_src_carries_nonce_after_self():
    context = SecurityContext(nonce="abc123")
    csp = build_csp(BaseConfig.CSP_POLICY, context)

    assert "script-src 'self' 'nonce-abc123' https://maps.googleapis.com" in csp


def test_directives():
    csp = build_csp(BaseConfig.CSP_POLICY, SecurityContext(nonce="n"))
    directives = [d.strip() for d in csp.split(";")]

    assert "default-src 'self'" in directives
    assert "style-src 'self' https://fonts.googleapis.com https://maps.googleapis.com" in directives
    assert "img-src 'self' data: https://maps.googleapis.com" in directives
    assert "frame-src 'self' https://www.google.com" in directives
    assert "connect-src 'self' https://maps.googleapis.com" in directives
    assert "object-src 'none'" in directives
    assert "upgrade-insecure-requests" in directives


def test_policy_template_is_not_mutated():
    before = list(BaseConfig.CSP_POLICY["script-src"])
    build_csp(BaseConfig.CSP_POLICY, SecurityContext(nonce="n"))

    assert BaseConfig.CSP_POLICY["script-src"] == before


def test_header_set():
    headers = security_header_set(_config(), SecurityContext(nonce="n"))

    assert headers["Referrer-Policy"] == "no-referrer-when-downgrade"
    assert headers["X-Content-Type-Options"] == "nosniff"
    assert headers["X-Frame-Options"] == "SAMEORIGIN"
    assert "'nonce-n'" in headers["Content-Security-Policy"]
