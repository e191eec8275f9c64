from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, send_from_directory

site_bp = Blueprint('site', __name__)


@site_bp.route('/')
def index():
    return send_from_directory(current_app.config['PUBLIC_DIR'], 'index.html')


@site_bp.route('/health')
def health_check():
    """Basic health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'version': current_app.config.get('VERSION', '1.0.0')
    })


@site_bp.route('/<path:filename>')
def public_asset(filename):
    # send_from_directory rejects paths escaping PUBLIC_DIR with a 404
    return send_from_directory(current_app.config['PUBLIC_DIR'], filename)
