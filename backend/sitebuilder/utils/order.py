from sitebuilder.extensions import db

def compact_order(items, order_field="order"):
    """
    Re-assigns sequential order values (1..N) to already ordered rows.
    """
    for index, item in enumerate(items, start=1):
        setattr(item, order_field, index)

    db.session.flush()
    return items
