"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate relies on `SQLModel.metadata`, which is populated only
  when the table models are imported.
- `alembic/env.py` imports `lenddesk.models`, so this module must import all
  SQLModel `table=True` models to register them.
"""

from lenddesk.inquiry.models import Inquiry  # noqa: F401
from lenddesk.item.models import Item  # noqa: F401
from lenddesk.user.models import User, WishlistEntry  # noqa: F401
