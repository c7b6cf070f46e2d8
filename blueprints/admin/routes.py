"""
Admin API routes.
Login, slot-level calendar and blackout date management.
"""

from flask import request, Blueprint, current_app
from flask_login import login_user, logout_user, current_user

from models.admin import Admin, authenticate_admin
from models.calendar import get_admin_calendar
from models.unavailable_date import set_unavailable_date, delete_unavailable_date
from utils.api_response import api_success, json_body
from utils.errors import AuthError
from utils.messages import get_message

admin_bp = Blueprint('admin', __name__)


def _actor() -> str:
    """Username of the logged-in admin, for log lines."""
    if current_user and current_user.is_authenticated:
        return current_user.username
    return 'anonymous'


@admin_bp.route('/login', methods=['POST'])
def login():
    """
    Check admin credentials.

    Request body:
        username: Admin username
        password: Admin password

    Returns:
        JSON with the username, or 401
    """
    data = json_body()
    admin = authenticate_admin(data.get('username'), data.get('password'))

    if admin is None:
        current_app.logger.info('Failed admin login for %r', data.get('username'))
        raise AuthError(get_message('invalid_credentials'))

    login_user(Admin(admin))
    current_app.logger.info('Admin %s logged in', admin['username'])

    return api_success(data={'username': admin['username']})


@admin_bp.route('/logout', methods=['POST'])
def logout():
    """End the admin session."""
    logout_user()
    return api_success(message=get_message('logout_success'))


@admin_bp.route('/calendar')
def calendar():
    """
    Per-slot booking counts and blackout dates for a month.

    Query params:
        year: Year (required)
        month: Month 1-12 (required)

    Returns:
        JSON with reservations and unavailableDates
    """
    data = get_admin_calendar(request.args.get('year'), request.args.get('month'))
    return api_success(data=data)


@admin_bp.route('/unavailable-dates', methods=['POST'])
def add_unavailable_date():
    """
    Mark a date unavailable (re-adding a date replaces its reason).

    Request body:
        date: Date YYYY-MM-DD
        reason: Optional reason

    Returns:
        JSON with success message
    """
    data = json_body()
    record = set_unavailable_date(data.get('date'), data.get('reason'))

    current_app.logger.info('Unavailable date %s set by %s', record['date'], _actor())
    return api_success(message=get_message('unavailable_date_set'))


@admin_bp.route('/unavailable-dates/<date>', methods=['DELETE'])
def remove_unavailable_date(date):
    """Remove a blackout date (no error if it was not set)."""
    delete_unavailable_date(date)

    current_app.logger.info('Unavailable date %s removed by %s', date, _actor())
    return api_success(message=get_message('unavailable_date_deleted'))
