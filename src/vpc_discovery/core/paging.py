"""Cursor pagination for list-style AWS calls."""

import logging
from typing import Any, Callable

logger = logging.getLogger("vpc_discovery.paging")


def fetch_all(
    list_call: Callable[..., dict],
    results_key: str,
    request_token_key: str = "NextToken",
    response_token_key: str = "NextToken",
    **params: Any,
) -> list:
    """Drain every page of a paginated call into one list.

    The call is re-issued with the response's next token copied into the
    request until a response carries no token (or an empty one). Errors from
    ``list_call`` propagate unchanged.

    boto3 paginators drive every page request themselves; this loop hands
    each request to ``list_call``, so a caller can wrap it (for example in
    ``call_with_retry``) and retry one throttled page without restarting
    the whole listing.

    Args:
        list_call: Callable taking request params as keyword arguments,
            e.g. ``ec2.describe_subnets``
        results_key: Response key holding the page's items (e.g. "Subnets")
        request_token_key: Request param that carries the paging token
        response_token_key: Response key that holds the next paging token
        **params: Request parameters sent with every page

    Returns:
        Items from all pages, in response order
    """
    request = dict(params)
    results: list = []
    pages = 0
    while True:
        response = list_call(**request)
        pages += 1
        results.extend(response.get(results_key) or [])
        token = response.get(response_token_key)
        if not token:
            break
        request[request_token_key] = token
    logger.debug("Fetched %d %s over %d page(s)", len(results), results_key, pages)
    return results
