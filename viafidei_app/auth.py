"""
Session user loading.

Accounts are managed elsewhere; the content API only needs to know who is
signed in so that their language override can win over query parameters.
"""
from flask import g
from flask_login import LoginManager, current_user

from viafidei_app.database import get_db_session
from viafidei_app.log import log
from viafidei_app.models import User

login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):
    """Flask-Login user loader."""
    try:
        with get_db_session() as db:
            return db.get(User, str(user_id))
    except Exception as e:
        log(f"User load error: {e}")
        return None


def init_login_manager(app):
    """Initialize Flask-Login with the app."""
    login_manager.init_app(app)
    # API-only: no login page to redirect to
    login_manager.login_view = None

    @app.before_request
    def set_current_user():
        g.current_user = current_user
