from typing import Any, Dict, Iterable, List, Mapping, Optional


def annotate_products(
    edges: Iterable[Mapping[str, Any]],
    reviews: Mapping[str, Optional[str]],
) -> List[Dict[str, Any]]:
    """
    Flatten product edges and attach each product's review snippet.

    Every product gets a ``review`` string (empty when the shop has not
    reviewed it) and the ``cursor`` of its edge.
    """
    products = []
    for edge in edges:
        node = edge.get("node") or {}
        products.append({
            **node,
            "review": reviews.get(node.get("id")) or "",
            "cursor": edge.get("cursor"),
        })
    return products
