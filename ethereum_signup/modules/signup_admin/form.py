"""
Ethereum Signup Admin Form
==========================

Settings form for how visitors register and log in with an Ethereum wallet.

The "who can register" radios are not stored. They are derived from
require_admin_confirm/require_mail_confirm when the form is built and
expanded back into those two flags on submit.
"""

import logging
from dataclasses import dataclass, fields, asdict

from ethereum_signup.core import db_log
from .defaults import SETTINGS_NAMESPACE
from .fields import FieldSet, Section, Field, CHECKBOX, RADIOS, SELECT, TEXTFIELD, TEXTAREA

logger = logging.getLogger(__name__)

FORM_ID = 'ethereum_signup_admin'

REGISTER_SELECTOR = 'user_ethereum_register'

VISITORS = 'visitors'
ADMIN_CONFIRM = 'admin_confirm'
EMAIL_CONFIRM = 'email_confirm'

REGISTER_OPTIONS = {
    VISITORS: 'Visitors can directly log in.',
    ADMIN_CONFIRM: 'Require Administrator to approve accounts.',
    EMAIL_CONFIRM: 'Require email confirmation before activating accounts.',
}


@dataclass
class SignupSettings:
    """The fields persisted on submit. Anything else submitted is dropped."""
    require_mail: bool
    require_mail_confirm: bool
    require_admin_confirm: bool
    login_redirect: str
    ui_visible_without_web3: bool
    register_role: str
    register_link_text: str
    register_terms_text: str
    login_link_text: str
    login_welcome_text: str

    @classmethod
    def from_values(cls, values):
        kwargs = {}
        for f in fields(cls):
            value = values.get(f.name)
            if f.type is bool:
                kwargs[f.name] = bool(value)
            else:
                kwargs[f.name] = '' if value is None else str(value)
        return cls(**kwargs)

    def as_dict(self):
        return asdict(self)


def classify(admin_confirm, mail_confirm):
    """
    Default value for the register radios from the two stored flags.

    Admin approval wins if both flags are somehow set.
    """
    if admin_confirm:
        return ADMIN_CONFIRM
    if mail_confirm:
        return EMAIL_CONFIRM
    return VISITORS


def expand(selection):
    """
    Map a register radios value to (require_mail_confirm, require_admin_confirm).

    Any value other than visitors or email_confirm means admin approval.
    """
    if selection == VISITORS:
        return False, False
    if selection == EMAIL_CONFIRM:
        return True, False
    return False, True


class SignupSettingsForm:
    """Admin form for the Ethereum signup settings"""

    form_id = FORM_ID

    def __init__(self, store, role_provider, namespace=SETTINGS_NAMESPACE):
        self.store = store
        self.role_provider = role_provider
        self.namespace = namespace

    def build_fieldset(self, settings=None):
        """Project the stored settings into form fields"""
        if settings is None:
            settings = self.store.get(self.namespace)

        signup = Section('settings', 'Signup settings', [
            Field(
                'require_mail', CHECKBOX, 'Require email to sign up.',
                default=bool(settings.get('require_mail')),
                description=(
                    'If you do not require email make sure "Require email verification when a '
                    'visitor creates an account" is not checked in account settings. And '
                    '"Notify user when account is activated" in user mail settings is not checked.'
                ),
            ),
            Field(
                REGISTER_SELECTOR, RADIOS, 'Who can register accounts using Ethereum signup?',
                default=classify(settings.get('require_admin_confirm'), settings.get('require_mail_confirm')),
                options=dict(REGISTER_OPTIONS),
            ),
            Field(
                'ui_visible_without_web3', CHECKBOX, 'Display Ethereum for everybody',
                default=bool(settings.get('ui_visible_without_web3')),
                description=(
                    'The user needs a web3 provider enabled in the browser in order to sign '
                    'messages. Un-checking will hide the "signup with Ethereum" option if the '
                    'browser does not support web3.'
                ),
            ),
            Field(
                'login_redirect', TEXTFIELD, 'Redirect after login',
                default=settings.get('login_redirect'),
                description='Path relative to the site root.',
                required=True,
            ),
        ])

        # The anonymous role is never offered
        role = Section('role', 'Registration Role', [
            Field(
                'register_role', SELECT, 'Registration Role',
                default=settings.get('register_role') or '',
                options=self.role_provider.list_roles(exclude_anonymous=True),
                empty_value='',
                description=(
                    'This role will be automatically assigned to users authenticated with '
                    'Ethereum signup. "Authenticated user" will always be set. Change to add '
                    'an additional role.'
                ),
            ),
        ])

        register = Section('register', 'Registration text', [
            Field(
                'register_link_text', TEXTFIELD, 'Register link text',
                default=settings.get('register_link_text'),
                description='Text for registration link.',
                required=True,
            ),
            Field(
                'register_terms_text', TEXTAREA, 'Terms text',
                default=settings.get('register_terms_text'),
                description='Text the user will be asked to digitally sign on registration.',
                required=True,
            ),
        ])

        login = Section('login', 'Login text', [
            Field(
                'login_link_text', TEXTFIELD, 'Login link text',
                default=settings.get('login_link_text'),
                description='Text for login link.',
                required=True,
            ),
            Field(
                'login_welcome_text', TEXTAREA, 'Login text',
                default=settings.get('login_welcome_text'),
                description='Text the user will be asked to digitally sign on login.',
                required=True,
            ),
        ])

        return FieldSet(self.form_id, [signup, role, register, login])

    def validate(self, values):
        """Form-level validation. Only the per-field required check applies."""
        return {}

    def submit(self, values):
        """Persist the submitted settings"""
        values = dict(values)

        selection = values.pop(REGISTER_SELECTOR, None)
        mail_confirm, admin_confirm = expand(selection)
        values['require_mail_confirm'] = mail_confirm
        values['require_admin_confirm'] = admin_confirm

        # Email confirmation needs an email address
        if mail_confirm:
            values['require_mail'] = True

        settings = SignupSettings.from_values(values)

        config = self.store.get_editable(self.namespace)
        for key, value in settings.as_dict().items():
            config.set(key, value)
        config.save()

        logger.info("Ethereum signup settings saved (register=%s)", classify(admin_confirm, mail_confirm))
        db_log('info', 'ethereum_signup', 'Signup settings saved', {
            'register': classify(admin_confirm, mail_confirm),
            'require_mail': settings.require_mail,
            'register_role': settings.register_role,
        })
