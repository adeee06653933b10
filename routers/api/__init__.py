from quart import Blueprint

api_blueprint = Blueprint('api', __name__)

# Import sub-modules to register routes
from . import cache
