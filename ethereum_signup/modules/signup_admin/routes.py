"""
Ethereum Signup Routes
======================

Admin form for the signup settings plus a public config endpoint for the
signup front end.
"""

import logging
from functools import wraps
from urllib.parse import urlencode

from flask import current_app, flash, jsonify, redirect, request, session, url_for

from ethereum_signup.core import LoggingService, get_config_value
from ethereum_signup.modules.settings import SettingsStoreError
from . import signup_admin_bp, signup_public_bp
from .form import SignupSettingsForm
from .renderer import FormRenderer

logger = logging.getLogger(__name__)

# Settings the signup front end reads. Confirmation policy and role stay server side.
PUBLIC_KEYS = (
    'ui_visible_without_web3',
    'require_mail',
    'login_redirect',
    'register_link_text',
    'register_terms_text',
    'login_link_text',
    'login_welcome_text',
)


def admin_required(f):
    """Decorator to require admin login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            login_url = get_config_value('ADMIN_LOGIN_URL', '/admin/login')
            return redirect(f"{login_url}?{urlencode({'next': request.path})}")
        return f(*args, **kwargs)
    return decorated_function


def _get_form():
    """Build the form from the store and roles registered by EthereumSignup"""
    ext = current_app.extensions['ethereum_signup']
    return SignupSettingsForm(ext.store, ext.roles, namespace=ext.namespace)


@signup_admin_bp.route('/', methods=['GET'])
@admin_required
def settings_form():
    """Ethereum signup settings page"""
    form = _get_form()
    return FormRenderer.render(form.build_fieldset(), page_title='Ethereum Signup settings')


@signup_admin_bp.route('/', methods=['POST'])
@admin_required
def save_settings_form():
    """Save the Ethereum signup settings"""
    form = _get_form()
    fieldset = form.build_fieldset()

    try:
        result = FormRenderer.process(form, request.form, fieldset=fieldset)
    except SettingsStoreError as e:
        logger.error(f"Error saving Ethereum signup settings: {e}")
        LoggingService.log_error_with_traceback('ethereum_signup', e)
        raise

    if not result.submitted:
        logger.info("Ethereum signup settings rejected: %s", ', '.join(sorted(result.errors)))
        return FormRenderer.render(fieldset, values=result.values, errors=result.errors,
                                   status=400, page_title='Ethereum Signup settings')

    LoggingService.log_user_action('ethereum_signup', 'Saved signup settings',
                                   user_id=str(session.get('admin_id')))
    flash('The configuration options have been saved.', 'success')
    return redirect(url_for('ethereum_signup_admin.settings_form'))


@signup_admin_bp.route('/api/settings')
@admin_required
def api_get_settings():
    """API endpoint to get the current signup settings"""
    form = _get_form()
    settings = form.store.get(form.namespace)
    return jsonify({'success': True, 'settings': settings.as_dict()})


@signup_public_bp.route('/config')
def public_config():
    """
    Public signup config for the wallet login/register front end.
    CORS headers come from EthereumSignup, using ETHEREUM_SIGNUP_ALLOWED_ORIGINS.

    Returns JSON:
        { "success": true, "config": {...} }
    """
    ext = current_app.extensions['ethereum_signup']
    settings = ext.store.get(ext.namespace)
    return jsonify({
        'success': True,
        'config': {key: settings.get(key) for key in PUBLIC_KEYS},
    })
