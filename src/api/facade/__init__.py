"""Public entry point for the presentation layer.

Usage::

    db = await create_db()
    session = AuthSession()
    result = await db.login_student(session, email, password, institution_id)
"""

from facade.db import Db
from facade.factory import create_db, create_identity_provider

__all__ = ["Db", "create_db", "create_identity_provider"]
