"""
Shared fixtures for the Ethereum signup tests.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import sqlite3
import tempfile

import pytest
from flask import Flask

from ethereum_signup import EthereumSignup


VALID_SUBMISSION = {
    'require_mail': '1',
    'user_ethereum_register': 'visitors',
    'ui_visible_without_web3': '1',
    'login_redirect': '/dashboard',
    'register_role': 'administrator',
    'register_link_text': 'Join with your wallet',
    'register_terms_text': 'I accept the terms.',
    'login_link_text': 'Wallet login',
    'login_welcome_text': 'Sign to log in.',
}


def _read_logs(path, source):
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    try:
        rows = conn.execute(
            "SELECT * FROM app_logs WHERE source = ? ORDER BY id DESC", (source,)
        ).fetchall()
        return [dict(row) for row in rows]
    finally:
        conn.close()


def _table_exists(path, table_name):
    conn = sqlite3.connect(path)
    try:
        row = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table_name,)
        ).fetchone()
        return row is not None
    finally:
        conn.close()


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="ethereum-signup-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Flask app with EthereumSignup initialised against temp databases."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["SETTINGS_DB"] = os.path.join(tmp_db_dir, "settings.db")
    app.config["USER_DB"] = os.path.join(tmp_db_dir, "users.db")
    app.config["LOGS_DB"] = os.path.join(tmp_db_dir, "app_logs.db")
    EthereumSignup(app)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with an admin session."""
    with client.session_transaction() as sess:
        sess['admin_id'] = 1
    return client


@pytest.fixture
def ext(app):
    return app.extensions['ethereum_signup']


@pytest.fixture
def submission():
    return dict(VALID_SUBMISSION)


@pytest.fixture
def read_logs():
    """Rows written to the app_logs table for one source, newest first."""
    return _read_logs


@pytest.fixture
def table_exists():
    return _table_exists
