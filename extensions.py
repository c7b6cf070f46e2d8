"""
Flask extensions initialization.
Extensions are initialized here and then initialized with the app in app.py.
"""

from flask_login import LoginManager

# Initialize Flask-Login
login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):
    """
    Load admin by ID for Flask-Login.

    Args:
        user_id: The admin ID as a string

    Returns:
        Admin object or None if not found
    """
    from models.admin import get_admin_by_id, Admin

    admin_dict = get_admin_by_id(int(user_id))
    if admin_dict:
        return Admin(admin_dict)
    return None
