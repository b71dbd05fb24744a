"""Install defaults for the Ethereum signup settings record."""

SETTINGS_NAMESPACE = 'ethereum_signup.settings'

DEFAULT_SETTINGS = {
    'require_mail': True,
    'require_mail_confirm': True,
    'require_admin_confirm': False,
    'ui_visible_without_web3': True,
    'login_redirect': '/user',
    'register_role': '',
    'register_link_text': 'Sign up with Ethereum',
    'register_terms_text': (
        'I agree to the terms of use of this site and confirm that I own the '
        'Ethereum account signing this message.'
    ),
    'login_link_text': 'Log in with Ethereum',
    'login_welcome_text': 'Welcome back! Please sign this message to log in.',
}
