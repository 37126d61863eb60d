"""
Ops Routes
==========

Public health endpoint, backend connection test and admin log feed.
"""

import shutil
import time

from flask import jsonify, request

from . import ops_health_bp, ops_backend_bp, ops_admin_bp
from ..admin.auth import admin_required
from ..products.fallback import fallback_products
from ...core import (
    LoggingService, BackendError, create_backend_client, get_config_value,
    is_backend_configured
)

_STARTED_AT = time.time()


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def _get_disk_usage():
    """Get disk usage for root partition."""
    try:
        usage = shutil.disk_usage('/')
        return {
            'total_gb': round(usage.total / (1024 ** 3), 1),
            'free_gb': round(usage.free / (1024 ** 3), 1),
            'percent': round((usage.used / usage.total) * 100, 1),
        }
    except OSError as e:
        return {'total_gb': 0, 'free_gb': 0, 'percent': 0, 'error': str(e)}


def _get_uptime():
    """Process uptime"""
    seconds = int(time.time() - _STARTED_AT)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    return {'seconds': seconds, 'formatted': f'{days}d {hours}h {rest // 60}m'}


def _backend_status():
    return 'configured' if is_backend_configured() else 'unconfigured'


# ---------------------------------------------------------------------------
# Public health
# ---------------------------------------------------------------------------

@ops_health_bp.route('', methods=['GET'])
def health():
    """Liveness plus a summary of what the catalog is serving from"""
    backend = _backend_status()
    disk = _get_disk_usage()

    status = 'ok'
    if backend == 'unconfigured' or disk.get('percent', 0) >= 90:
        status = 'warning'

    return jsonify({
        'status': status,
        'checks': {
            'backend': backend,
            'fallback_products': len(fallback_products),
            'disk': disk,
            'uptime': _get_uptime(),
        }
    })


# ---------------------------------------------------------------------------
# Backend connection test
# ---------------------------------------------------------------------------

@ops_backend_bp.route('/test', methods=['GET'])
def backend_test():
    """Count rows in the products table to prove the backend is reachable"""
    url = get_config_value('SUPABASE_URL')
    key = get_config_value('SUPABASE_ANON_KEY')

    if not url or not key:
        return jsonify({
            'success': False,
            'error': 'Backend environment variables not configured',
            'details': {'url': bool(url), 'key': bool(key)}
        })

    client = create_backend_client(use_service_role=False)
    try:
        count = client.ping()
    except BackendError as e:
        LoggingService.error('ops', 'Backend connection test failed', e.to_dict())
        return jsonify({
            'success': False,
            'error': 'Backend connection error',
            'details': {'code': e.code, 'message': e.message, 'hint': e.hint}
        })

    LoggingService.info('ops', 'Backend connection test passed', {'count': count})
    return jsonify({'success': True, 'message': 'Backend connection working', 'count': count})


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

@ops_admin_bp.route('/logs', methods=['GET'])
@admin_required
def recent_logs():
    """Recent persistent log entries"""
    limit = min(request.args.get('limit', 50, type=int), 500)
    logs = LoggingService.get_recent_logs(
        limit=limit,
        level=request.args.get('level'),
        source=request.args.get('source'),
    )
    return jsonify({'success': True, 'logs': logs, 'count': len(logs)})


@ops_admin_bp.route('/logs/cleanup', methods=['POST'])
@admin_required
def cleanup_logs():
    """Delete log entries older than ?days= (default 30)"""
    days = request.args.get('days', 30, type=int)
    deleted = LoggingService.cleanup_old_logs(days_to_keep=days)
    return jsonify({'success': True, 'deleted': deleted})


@ops_admin_bp.route('/fallback/reset', methods=['POST'])
@admin_required
def reset_fallback():
    """Restore the sample catalogue"""
    fallback_products.reset()
    LoggingService.info('ops', 'Fallback catalogue reset')
    return jsonify({'success': True, 'count': len(fallback_products)})
