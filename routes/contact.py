import logging

from flask import Blueprint, current_app, make_response, request

from core.mail_dispatcher import MailConfig, MailDispatcher, Outcome
from core.status_pages import render_status
from core.validator import Submission
from middleware.security import current_security_context

contact_bp = Blueprint('contact', __name__)
logger = logging.getLogger(__name__)


def _read_submission() -> Submission:
    if request.is_json:
        return Submission.from_mapping(request.get_json(silent=True))
    return Submission.from_mapping(request.form)


def _status_response(outcome, context, reason=None):
    html, status_code = render_status(
        outcome,
        context,
        reason=reason,
        expose_reason=current_app.config.get('EXPOSE_TRANSPORT_ERRORS', True),
    )
    response = make_response(html, status_code)
    response.mimetype = 'text/html'
    return response


@contact_bp.route('/send-email', methods=['POST'])
def send_email():
    """
    Validate a contact form submission and relay it by email

    Accepts form-encoded or JSON bodies with name, email, phone and message.
    """
    context = current_security_context()
    submission = _read_submission()

    if not submission.is_valid():
        logger.info(f"Rejected invalid contact submission from {request.remote_addr}")
        return _status_response(Outcome.INVALID_INPUT, context)

    dispatcher = MailDispatcher(
        MailConfig.from_config(current_app.config),
        smtp_factory=current_app.extensions['smtp_factory'],
    )
    result = dispatcher.dispatch(submission)

    return _status_response(result.outcome, context, reason=result.reason)
