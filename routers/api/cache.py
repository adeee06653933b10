from quart import current_app, jsonify
from . import api_blueprint
from utils import api_handler, require_cache_token


def _admin():
    return current_app.extensions['cache_admin']


@api_blueprint.route('/cache/status')
@api_handler()
@require_cache_token
async def cache_status():
    """Per-tag image cache state and global totals."""
    return jsonify(_admin().status())


@api_blueprint.route('/cache/clear', methods=['GET', 'POST'])
@api_handler()
@require_cache_token
async def cache_clear():
    """Drop every cached tag. In-flight fetches finish but are not stored."""
    return jsonify(_admin().clear())
