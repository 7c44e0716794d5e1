from contextlib import contextmanager
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sitebuilder.extensions import db

@contextmanager
def transactional():
    """
    Commit the session when the block completes, roll back when it raises.

    Audit entries staged with log_action inside the block are committed
    together with the change they describe.
    """
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.warning("Store write rolled back", exc_info=True)
        raise
    except Exception:
        db.session.rollback()
        raise
