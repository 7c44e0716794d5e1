def normalize_post(post, include_content=True):
    data = {
        "id": post.id,
        "site_id": post.site_id,
        "title": post.title,
        "slug": post.slug,
        "featured_image": post.featured_image,
        "is_published": bool(post.is_published),
        "published_at": post.published_at.isoformat() if post.published_at else None,
        "created_at": post.created_at.isoformat(),
        "updated_at": post.updated_at.isoformat() if post.updated_at else None,
    }

    if include_content:
        data["content"] = post.content or []

    return data
