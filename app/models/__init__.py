# Bar occupancy - Database Models
# Import all models here for SQLAlchemy discovery

from app.models.bar import Bar     # noqa
from app.models.user import User   # noqa
