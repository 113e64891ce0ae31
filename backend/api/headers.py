"""
Response header helpers: pagination and entity alerts.
"""

from typing import Dict, List

from starlette.datastructures import URL

from config.settings import get_app_name
from constants import (
    AlertAction,
    SortDirection,
    TOTAL_COUNT_HEADER,
    ALERT_HEADER_SUFFIX,
    PARAMS_HEADER_SUFFIX,
)
from dtos.internal import Page, SortOrder
from exceptions import ValidationError


def parse_sort(values: List[str]) -> List[SortOrder]:
    """
    Parse repeated ``sort=field,dir`` query parameters.

    The direction is optional and defaults to ascending.

    Raises:
        ValidationError: If a parameter is empty or names an unknown direction
    """
    orders = []
    for value in values:
        field_name, _, direction = value.partition(',')
        field_name = field_name.strip()
        if not field_name:
            raise ValidationError(f"Invalid sort parameter '{value}'", field="sort", reason="invalidsort")
        try:
            orders.append(SortOrder(field_name, SortDirection.from_string(direction or 'asc')))
        except ValueError as e:
            raise ValidationError(str(e), field="sort", reason="invalidsort")
    return orders


def pagination_headers(url: URL, page: Page) -> Dict[str, str]:
    """
    X-Total-Count and RFC 5988 Link headers for a page of results.

    Args:
        url: URL of the current request
        page: Page that was served

    Returns:
        Header name -> value
    """
    size = page.request.size
    current = page.request.page
    last = max(page.total_pages - 1, 0)

    def link(number: int, rel: str) -> str:
        return f'<{url.include_query_params(page=number, size=size)}>; rel="{rel}"'

    links = []
    if not page.is_last:
        links.append(link(current + 1, "next"))
    if current > 0:
        links.append(link(current - 1, "prev"))
    links.append(link(last, "last"))
    links.append(link(0, "first"))
    return {TOTAL_COUNT_HEADER: str(page.total), "Link": ",".join(links)}


def alert_header_names(app_name: str) -> List[str]:
    """Names of the alert and alert-params headers for ``app_name``."""
    return [f"X-{app_name}{ALERT_HEADER_SUFFIX}", f"X-{app_name}{PARAMS_HEADER_SUFFIX}"]


def alert_headers(action: AlertAction, alert_name: str, entity_id: int) -> Dict[str, str]:
    """
    Entity alert headers, e.g. ``X-storefrontApp-alert: storefrontApp.shoppingCart.created``.

    Args:
        action: What happened to the entity
        alert_name: Entity name in alert form
        entity_id: Identifier of the entity

    Returns:
        Header name -> value
    """
    app_name = get_app_name()
    alert, params = alert_header_names(app_name)
    return {
        alert: f"{app_name}.{alert_name}.{action.value}",
        params: str(entity_id),
    }
