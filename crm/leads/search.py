from typing import Any, Dict, List, Optional, Tuple

from crm.leads.opensearch import get_client, leads_index_name


def search_leads_os(*, query: str, limit: int, offset: int, owner_id: Optional[int] = None) -> Tuple[int, List[Dict[str, Any]]]:
    """
    Returns (total, items)
    Each item is the stored document shape from leads/opensearch.py.
    """
    q = (query or "").strip()
    if not q:
        raise ValueError("query is required")

    filters: List[Dict[str, Any]] = [{"term": {"deleted": False}}]
    if owner_id is not None:
        filters.append({"term": {"owner_id": owner_id}})

    body = {
        "from": offset,
        "size": limit,
        "track_total_hits": True,
        "query": {
            "bool": {
                "filter": filters,
                "must": [
                    {
                        "multi_match": {
                            "query": q,
                            "fields": ["name^2", "email^2", "company^2", "phone", "status"],
                            "type": "best_fields",
                            "operator": "and",
                        }
                    }
                ],
            }
        },
        "sort": [{"updated_at": {"order": "desc"}}],
    }

    resp = get_client().search(index=leads_index_name(), body=body)
    total = int(resp["hits"]["total"]["value"])
    items = [h["_source"] for h in resp["hits"]["hits"]]
    return total, items
