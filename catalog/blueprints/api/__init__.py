from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

# Import route modules to register them with the blueprint
from . import errors  # noqa: E402,F401
from . import inventory_routes  # noqa: E402,F401
from . import item_routes  # noqa: E402,F401
