"""
Ethereum Signup - Flask admin settings for wallet-based signup
==============================================================

Admin configuration for how visitors register and log in with an
Ethereum wallet:
- Registration policy (direct login, admin approval, email confirmation)
- Role assigned on registration
- Register/login link and signing texts
- Public config endpoint for the signup front end

Usage:
    from ethereum_signup import EthereumSignup

    app = Flask(__name__)
    EthereumSignup(app)
"""

__version__ = '0.1.0'

from .extension import EthereumSignup

__all__ = ['EthereumSignup']
