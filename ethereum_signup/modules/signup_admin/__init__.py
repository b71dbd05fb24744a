"""
Ethereum Signup Admin Module
============================

Provides:
- Admin form for the Ethereum signup settings (texts, role, confirmation policy)
- Admin JSON endpoint with the current settings
- Public, CORS-enabled endpoint with the settings the signup front end needs
"""

from flask import Blueprint
import os

_template_dir = os.path.join(os.path.dirname(__file__), 'templates')

signup_admin_bp = Blueprint('ethereum_signup_admin', __name__,
                            url_prefix='/admin/config/ethereum-signup',
                            template_folder=_template_dir)

signup_public_bp = Blueprint('ethereum_signup', __name__,
                             url_prefix='/ethereum-signup')

from . import routes
from .form import SignupSettingsForm, SignupSettings, classify, expand
from .renderer import FormRenderer, FormResult

__all__ = [
    'signup_admin_bp', 'signup_public_bp', 'SignupSettingsForm', 'SignupSettings',
    'classify', 'expand', 'FormRenderer', 'FormResult'
]
