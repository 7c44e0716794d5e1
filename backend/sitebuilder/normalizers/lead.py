def normalize_lead(lead):
    return {
        "id": lead.id,
        "site_id": lead.site_id,
        "name": lead.name,
        "email": lead.email,
        "phone": lead.phone,
        "grade": lead.grade,
        "message": lead.message,
        "created_at": lead.created_at.isoformat(),
    }
