def page_params(request, *, default_limit: int = 50, max_limit: int = 200):
    """
    Parse ?limit= and ?offset= leniently; bad values fall back to defaults.
    """
    try:
        limit = int(request.query_params.get("limit") or default_limit)
    except (TypeError, ValueError):
        limit = default_limit
    limit = max(1, min(max_limit, limit))

    try:
        offset = int(request.query_params.get("offset") or 0)
    except (TypeError, ValueError):
        offset = 0
    offset = max(0, offset)

    return limit, offset


def paginated(qs, serializer_class, *, limit: int, offset: int, **extra):
    total = qs.count()
    items = qs[offset: offset + limit]
    return {
        "items": serializer_class(items, many=True).data,
        "page": {"limit": limit, "offset": offset, "total": total},
        **extra,
    }
