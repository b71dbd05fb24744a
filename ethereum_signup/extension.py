"""
EthereumSignup Flask extension
==============================

Wires the settings store, role provider and signup blueprints into a
Flask app:

    app = Flask(__name__)
    EthereumSignup(app)

or with an app factory:

    signup = EthereumSignup()

    def create_app():
        app = Flask(__name__)
        signup.init_app(app)
        return app

Everything bound to one app (store, roles, registered modules) lives in
app.extensions['ethereum_signup'], so one extension can serve several apps.
"""

import logging
import os

from flask import current_app
from flask_cors import CORS

from .core.config import Config, split_origins
from .modules.roles import RoleProvider
from .modules.settings import SettingsStore, register_defaults
from .modules.signup_admin.defaults import SETTINGS_NAMESPACE, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

# app.config keys filled from Config when the host app leaves them unset
CONFIG_KEYS = (
    'DB_DIR', 'SETTINGS_DB', 'USER_DB', 'LOGS_DB',
    'ADMIN_LOGIN_URL', 'ETHEREUM_SIGNUP_ALLOWED_ORIGINS',
)

# Routes served with CORS headers
PUBLIC_RESOURCES = r'/ethereum-signup/.*'


class SignupState:
    """Per-app settings store and role provider"""

    def __init__(self, extension, store, roles, namespace):
        self.extension = extension
        self.store = store
        self.roles = roles
        self.namespace = namespace
        self.registered = []

    def get_registered_modules(self):
        return list(self.registered)


class EthereumSignup:

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self.namespace = self._config.get('namespace', SETTINGS_NAMESPACE)
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._setup_database_dir(app)

        register_defaults(self.namespace, DEFAULT_SETTINGS)

        store = SettingsStore(app.config['SETTINGS_DB'])
        store.init_db()

        roles = RoleProvider(app.config['USER_DB'])
        roles.init_db()

        state = SignupState(self, store, roles, self.namespace)
        self._register_blueprints(app, state)

        app.extensions['ethereum_signup'] = state
        logger.info("Ethereum signup initialised (modules: %s)", ', '.join(state.registered))
        return state

    def _apply_config(self, app):
        db_dir = app.config.get('DB_DIR') or Config.DB_DIR
        app.config.setdefault('DB_DIR', db_dir)

        # Explicit env paths first, then files under the app's DB_DIR
        derived = {
            'SETTINGS_DB': os.getenv('SETTINGS_DB') or os.path.join(db_dir, 'settings.db'),
            'USER_DB': os.getenv('USER_DB') or os.path.join(db_dir, 'users.db'),
            'LOGS_DB': os.getenv('LOGS_DB') or os.path.join(db_dir, 'app_logs.db'),
        }
        for key in CONFIG_KEYS:
            if app.config.get(key) is None:
                app.config[key] = derived.get(key, getattr(Config, key, None))

        if not app.config.get('SECRET_KEY') and Config.SECRET_KEY:
            app.config['SECRET_KEY'] = Config.SECRET_KEY

    def _setup_database_dir(self, app):
        os.makedirs(app.config['DB_DIR'], exist_ok=True)

    def _register_blueprints(self, app, state):
        from .modules.signup_admin import signup_admin_bp, signup_public_bp

        features = self._config.get('features', {})

        app.register_blueprint(signup_admin_bp)
        state.registered.append('signup_admin')

        if features.get('public_config', True):
            origins = app.config['ETHEREUM_SIGNUP_ALLOWED_ORIGINS']
            if isinstance(origins, str):
                origins = split_origins(origins)

            CORS(app, resources={PUBLIC_RESOURCES: {'origins': origins}}, supports_credentials=False)
            app.register_blueprint(signup_public_bp)
            state.registered.append('signup_public')

    def get_state(self, app=None):
        """Per-app state, for the given app or the current one"""
        if app is None:
            app = current_app
        return app.extensions['ethereum_signup']

    def get_registered_modules(self, app=None):
        return self.get_state(app).get_registered_modules()
