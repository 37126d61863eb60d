"""
Ops Module
==========

Health monitoring and backend diagnostics.

Features:
- Public /health endpoint for uptime monitors (no auth)
- /api/backend/test connection test against the products table
- Admin log feed and log cleanup

Usage:
    from novita.modules.ops import ops_health_bp, ops_backend_bp, ops_admin_bp

    app.register_blueprint(ops_health_bp)   # Registers at /health
    app.register_blueprint(ops_backend_bp)  # Registers at /api/backend
    app.register_blueprint(ops_admin_bp)    # Registers at /admin/ops
"""

from flask import Blueprint

# Public health endpoint (no auth, for uptime monitors)
ops_health_bp = Blueprint(
    'ops_health',
    __name__,
    url_prefix='/health'
)

# Backend connection test
ops_backend_bp = Blueprint(
    'ops_backend',
    __name__,
    url_prefix='/api/backend'
)

# Admin ops endpoints (session auth)
ops_admin_bp = Blueprint(
    'ops_admin',
    __name__,
    url_prefix='/admin/ops'
)

from . import routes
