from quart import Blueprint, send_from_directory
import config

static_blueprint = Blueprint('static_files', __name__)


@static_blueprint.route('/styles.css')
async def serve_stylesheet():
    """Site stylesheet, served from the root path the templates link to."""
    return await send_from_directory(config.STATIC_DIR, 'styles.css', mimetype='text/css')
