"""
Model package.

`SQLModel.metadata` is populated only when the table models are imported.
`peopledir.db.engine.init_db` imports this package before `create_all`, so
this module must import all SQLModel `table=True` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from peopledir.user.models import User  # noqa: F401
