from .web import main_blueprint
from .api import api_blueprint
from .static_files import static_blueprint

__all__ = ['main_blueprint', 'api_blueprint', 'static_blueprint']
