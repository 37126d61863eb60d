"""
Admin Routes
============

Login/logout for admin mode. Two ways in:
- password only: compared with the ADMIN_PASSWORD setting
- email + password: signed in through the backend auth endpoint, the
  returned access token is kept in the session and used for product writes
"""

from flask import request, session, jsonify

from . import admin_bp
from .auth import check_admin_password, is_admin
from ...core import LoggingService, BackendError, create_backend_client


def _clear_admin_session():
    for key in ('admin_id', 'admin_email', 'admin_mode', 'access_token'):
        session.pop(key, None)


@admin_bp.route('/login', methods=['POST'])
def login():
    """Enter admin mode"""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Invalid request body'}), 400

    email = str(data.get('email') or '').strip().lower()
    password = data.get('password')
    password = '' if password is None else str(password)

    if not password:
        return jsonify({'success': False, 'error': 'Password is required'}), 400

    if email:
        client = create_backend_client(use_service_role=False)
        if client is None:
            return jsonify({'success': False, 'error': 'Backend not configured'}), 503

        try:
            auth_session = client.sign_in_with_password(email, password)
        except BackendError as e:
            LoggingService.log_security_event('Admin backend sign-in failed', {'email': email, 'error': e.message})
            return jsonify({'success': False, 'error': 'Invalid email or password'}), 401

        user = auth_session.get('user') or {}
        _clear_admin_session()
        session['admin_id'] = user.get('id') or email
        session['admin_email'] = user.get('email') or email
        session['admin_mode'] = 'backend'
        session['access_token'] = auth_session['access_token']
        LoggingService.info('admin', 'Admin signed in through the backend', user_id=session['admin_id'])
        return jsonify({'success': True, 'email': session['admin_email'], 'mode': 'backend'})

    valid = check_admin_password(password)
    if valid is None:
        return jsonify({'success': False, 'error': 'Admin password not configured'}), 503
    if not valid:
        LoggingService.log_security_event('Admin password login failed')
        return jsonify({'success': False, 'error': 'Incorrect password'}), 401

    _clear_admin_session()
    session['admin_id'] = 'admin'
    session['admin_mode'] = 'password'
    LoggingService.info('admin', 'Admin signed in with password')
    return jsonify({'success': True, 'email': None, 'mode': 'password'})


@admin_bp.route('/logout', methods=['POST'])
def logout():
    """Leave admin mode"""
    was_admin = is_admin()
    _clear_admin_session()
    if was_admin:
        LoggingService.info('admin', 'Admin signed out')
    return jsonify({'success': True})


@admin_bp.route('/session')
def session_status():
    """Current admin mode state"""
    return jsonify({
        'is_admin': is_admin(),
        'email': session.get('admin_email'),
        'mode': session.get('admin_mode'),
    })
