from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import catalog
from . import sites
from . import sections
from . import blog
from . import uploads
from . import leads
from . import audit
