def normalize_section(section):
    return {
        "id": section.id,
        "site_id": section.site_id,
        "type": section.type,
        "order": section.order,
        "is_visible": bool(section.is_visible),
        "content": section.content or {},
        "updated_at": section.updated_at.isoformat() if section.updated_at else None,
    }
