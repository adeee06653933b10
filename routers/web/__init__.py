"""
Web routes package.

This package contains all HTML page routes organized by functionality:
- pages: Home and inspiration pages, legacy redirects
- gallery: Tag-backed gallery pages
"""

from quart import Blueprint
from . import pages, gallery

# Create main blueprint
main_blueprint = Blueprint('main', __name__)

# Register all routes directly on the main blueprint
pages.register_routes(main_blueprint)
gallery.register_routes(main_blueprint)

__all__ = ['main_blueprint']
