# core/security_policy.py
"""
Per-request Content Security Policy generation
"""

import secrets
from dataclasses import dataclass
from typing import Dict, List, Mapping


@dataclass(frozen=True)
class SecurityContext:
    """Request-scoped security state shared by headers and rendered pages"""
    nonce: str

    @classmethod
    def generate(cls) -> 'SecurityContext':
        # 128 bits of randomness
        return cls(nonce=secrets.token_hex(16))

    @property
    def nonce_source(self) -> str:
        return f"'nonce-{self.nonce}'"


def build_csp(policy: Mapping[str, List[str]], context: SecurityContext) -> str:
    """
    Serialize a CSP directive map, inserting the request nonce into script-src

    The nonce source is placed right after ``'self'`` so the header reads
    ``script-src 'self' 'nonce-...' <origins>``.
    """
    directives = []
    for directive, sources in policy.items():
        sources = list(sources)
        if directive == 'script-src':
            position = 1 if sources and sources[0] == "'self'" else 0
            sources.insert(position, context.nonce_source)
        if sources:
            directives.append(f"{directive} {' '.join(sources)}")
        else:
            directives.append(directive)
    return '; '.join(directives)


def security_header_set(config: Mapping, context: SecurityContext) -> Dict[str, str]:
    """
    Full header set for one response

    Args:
        config: Flask config (or any mapping) holding CSP_POLICY,
            REFERRER_POLICY and SECURITY_HEADERS
        context: the request's security context

    Returns:
        Header name to value mapping
    """
    headers = dict(config['SECURITY_HEADERS'])
    headers['Content-Security-Policy'] = build_csp(config['CSP_POLICY'], context)
    headers['Referrer-Policy'] = config['REFERRER_POLICY']
    return headers
