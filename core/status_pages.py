# core/status_pages.py
"""
Fixed HTML status pages returned by the contact endpoint
"""

from typing import Optional, Tuple

from markupsafe import escape

from core.mail_dispatcher import Outcome
from core.security_policy import SecurityContext

REDIRECT_DELAY_MS = 5000

PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Email Status</title>
</head>
<body>
    <p>{message}</p>
    <p>Redirecting to the homepage in 5 seconds...</p>
    <script nonce="{nonce}">
        setTimeout(function() {{
            window.location.href = '/';
        }}, {delay});
    </script>
</body>
</html>
"""

MESSAGES = {
    Outcome.INVALID_INPUT: (400, 'Invalid input data'),
    Outcome.CONFIG_MISSING: (500, 'Email configuration is missing.'),
    Outcome.FAILED: (500, 'Failed to send email: {reason}'),
    Outcome.SENT: (200, 'Email sent successfully.'),
}

GENERIC_FAILURE = 'Failed to send email. Please try again later.'


def render_status(outcome: Outcome, context: SecurityContext,
                  reason: Optional[str] = None,
                  expose_reason: bool = True) -> Tuple[str, int]:
    """
    Render the status page for a submission outcome

    Args:
        outcome: what happened to the submission
        context: the request's security context; its nonce tags the script
        reason: transport error text, only used for FAILED
        expose_reason: include ``reason`` in the page instead of a generic line

    Returns:
        Tuple of (html, status_code)
    """
    status_code, message = MESSAGES[outcome]

    if outcome is Outcome.FAILED:
        if expose_reason:
            message = message.format(reason=escape(reason or 'unknown error'))
        else:
            message = GENERIC_FAILURE

    html = PAGE.format(
        message=message,
        nonce=escape(context.nonce),
        delay=REDIRECT_DELAY_MS,
    )
    return html, status_code
