"""
Settings Routes
===============

Admin API for stored settings and the public site-config endpoint.
"""

from flask import request, jsonify
from flask_cors import cross_origin

from . import settings_bp, site_config_bp
from .database import (
    get_all_settings, set_setting, delete_setting, schema_entry, SETTINGS_SCHEMA
)
from .helpers import get_site_config, validate_site_config
from ..admin.auth import admin_required
from ...core import LoggingService


@settings_bp.route('/api/schema')
@admin_required
def api_schema():
    """Settings schema for the admin form"""
    return jsonify({'success': True, 'schema': SETTINGS_SCHEMA})


@settings_bp.route('/api/settings')
@admin_required
def api_get_settings():
    """API endpoint to get all settings"""
    category = request.args.get('category')
    settings = get_all_settings(category=category, mask_secrets=True)
    return jsonify({'success': True, 'settings': settings})


@settings_bp.route('/api/settings/<key>', methods=['GET'])
@admin_required
def api_get_setting(key):
    """API endpoint to get a single setting (masked)"""
    setting = next((s for s in get_all_settings(mask_secrets=True) if s['key'] == key), None)

    if setting:
        return jsonify({'success': True, 'setting': setting})
    return jsonify({'success': False, 'error': 'Setting not found'}), 404


@settings_bp.route('/api/settings', methods=['POST'])
@admin_required
def api_save_setting():
    """API endpoint to save a single setting"""
    data = request.get_json(silent=True)

    if not data or 'key' not in data:
        return jsonify({'success': False, 'error': 'Key is required'}), 400

    key = data['key']
    value = data.get('value', '')
    category, entry = schema_entry(key)
    if entry:
        is_secret = entry.get('is_secret', False)
        description = entry.get('description')
    else:
        category = data.get('category', 'general')
        is_secret = bool(data.get('is_secret', False))
        description = data.get('description')

    # Don't overwrite secrets with masked value
    if is_secret and isinstance(value, str) and value.startswith('*'):
        return jsonify({'success': True, 'message': 'Masked value ignored'})

    if category == 'site':
        errors = validate_site_config({key: value})
        if errors:
            return jsonify({'success': False, 'error': '; '.join(errors)}), 400

    if set_setting(key, value, category, is_secret, description):
        LoggingService.info('settings', f'Setting saved: {key}')
        return jsonify({'success': True, 'message': 'Setting saved'})
    return jsonify({'success': False, 'error': 'Failed to save setting'}), 500


@settings_bp.route('/api/settings/<key>', methods=['DELETE'])
@admin_required
def api_delete_setting(key):
    """API endpoint to delete a setting"""
    if delete_setting(key):
        LoggingService.info('settings', f'Setting deleted: {key}')
        return jsonify({'success': True, 'message': 'Setting deleted'})
    return jsonify({'success': False, 'error': 'Setting not found'}), 404


@site_config_bp.route('', methods=['GET'])
@cross_origin()
def get_config():
    """Storefront configuration (public)"""
    return jsonify({'success': True, 'config': get_site_config()})


@site_config_bp.route('', methods=['PUT'])
@admin_required
def update_config():
    """Bulk update of storefront configuration"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({'success': False, 'error': 'JSON object body required'}), 400

    errors = validate_site_config(data)
    if errors:
        return jsonify({'success': False, 'error': '; '.join(errors)}), 400

    for key, value in data.items():
        _, entry = schema_entry(key)
        if not set_setting(key, value, 'site', False, entry.get('description')):
            return jsonify({'success': False, 'error': f'Failed to save {key}'}), 500

    LoggingService.info('settings', 'Site configuration updated', {'keys': sorted(data)})
    return jsonify({'success': True, 'config': get_site_config()})
