"""Profitbase REST endpoints.

Each method shapes its arguments into a path, query parameters and body and
hands them to :meth:`ProfitbaseClient.request`. Every method accepts a raw
``query_params`` mapping (and ``body`` where the endpoint takes one) that is
merged last, so caller-supplied keys win over the typed arguments.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import requests

GET = "GET"
PATCH = "PATCH"
POST = "POST"
PUT = "PUT"


def _merge(typed: Mapping[str, Any], overrides: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge ``overrides`` onto ``typed``, dropping typed values that are None."""
    merged = {key: value for key, value in typed.items() if value is not None}
    merged.update(overrides or {})
    return merged


class EndpointsMixin:
    """Endpoint methods for a class providing ``request``."""

    # ------------------------------------------------------------------
    # Houses
    # ------------------------------------------------------------------
    def houses(self, query_params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request(GET, "house", query_params=query_params)

    def house_floor_count(
        self, house_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"houseId": house_id}, query_params)
        return self.request(GET, "house/get-count-floors", query_params=params)

    def house_floor_property_count(
        self, house_id: int, floor: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"houseId": house_id, "floor": floor}, query_params)
        return self.request(GET, "house/get-count-properties-on-floor", query_params=params)

    def houses_legacy_v3(
        self, project_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        """List houses of a project through the v3-compatible endpoint."""
        return self.request(GET, f"projects/{project_id}/houses", query_params=query_params)

    def house_create(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(POST, "house", query_params=query_params, body=body)

    def house_update(
        self, house_id: int, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(PUT, f"house/{house_id}", query_params=query_params, body=body)

    def houses_search(
        self, search_query: str, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"text": search_query}, query_params)
        return self.request(GET, "house/search", query_params=params)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------
    def projects(
        self, is_archive: bool | None = None, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"isArchive": is_archive}, query_params)
        return self.request(GET, "projects", query_params=params)

    def project_create(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(POST, "projects", query_params=query_params, body=body)

    def project_update(
        self, project_id: int, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(PUT, f"projects/{project_id}", query_params=query_params, body=body)

    def projects_search(
        self, search_query: str, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"text": search_query}, query_params)
        return self.request(GET, "projects/search", query_params=params)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    def properties(self, query_params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request(GET, "property", query_params=query_params)

    def property_create(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(POST, "properties", query_params=query_params, body=body)

    def property_update(
        self, property_id: int, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(
            PATCH, f"properties/{property_id}", query_params=query_params, body=body
        )

    def property_types(self, query_params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request(GET, "property-types", query_params=query_params)

    def property_deal_list(
        self, deal_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(GET, f"property/deal/{deal_id}", query_params=query_params)

    def property_history(
        self,
        property_id: int,
        offset: int | None = None,
        limit: int | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        """Fetch one page of a property's change history.

        ``offset`` and ``limit`` are sent only when given.
        """
        params = _merge({"offset": offset, "limit": limit}, query_params)
        return self.request(GET, f"property/history/{property_id}", query_params=params)

    def properties_legacy_v3(
        self, project_id: int, house_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        path = f"projects/{project_id}/houses/{house_id}/properties/list"
        return self.request(GET, path, query_params=query_params)

    def property_deals(
        self, property_ids: Sequence[int], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"ids[]": list(property_ids)}, query_params)
        return self.request(GET, "get-property-deals", query_params=params)

    def property_status_change(
        self, property_id: int, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        path = f"properties/{property_id}/status-change"
        return self.request(POST, path, query_params=query_params, body=body)

    def reserve_prolong(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(PATCH, "reserve/prolong", query_params=query_params, body=body)

    # ------------------------------------------------------------------
    # Board, plans, layout
    # ------------------------------------------------------------------
    def board(
        self, house_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"houseId": house_id}, query_params)
        return self.request(GET, "board", query_params=params)

    def plans(self, query_params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request(GET, "plan", query_params=query_params)

    def presets_legacy(
        self, project_id: int, house_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        path = f"projects/{project_id}/houses/{house_id}/presets"
        return self.request(GET, path, query_params=query_params)

    def facades(
        self, house_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"houseId": house_id}, query_params)
        return self.request(GET, "facade", query_params=params)

    def floors(
        self, house_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"houseId": house_id}, query_params)
        return self.request(GET, "floor", query_params=params)

    def special_offers(
        self,
        is_archived: bool | None = None,
        is_discounted: bool | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        params = _merge({"isArchived": is_archived, "isDiscounted": is_discounted}, query_params)
        return self.request(GET, "special-offer", query_params=params)

    # ------------------------------------------------------------------
    # CRM
    # ------------------------------------------------------------------
    def crm_deals(
        self, deal_id: int | None = None, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"dealId": deal_id}, query_params)
        return self.request(GET, "crm/deals", query_params=params)

    def crm_property_deals(
        self, property_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(GET, f"crm/deals/property/{property_id}", query_params=query_params)

    def crm_property_deal_add(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(POST, "crm/addPropertyDeal", query_params=query_params, body=body)

    def crm_property_deal_remove(
        self,
        deal_id: int,
        body: dict[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        payload = _merge({"dealId": deal_id}, body)
        return self.request(
            POST, "crm/removePropertyDeal", query_params=query_params, body=payload
        )

    def crm_deal_property_update(
        self, deal_id: int, property_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        path = f"crm/update/deal/{deal_id}/property/{property_id}"
        return self.request(GET, path, query_params=query_params)

    def crm_property_status_sync(
        self, deal_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"dealId": deal_id}, query_params)
        return self.request(GET, "crm/syncPropertyStatus", query_params=params)

    # ------------------------------------------------------------------
    # Orders, history, statuses
    # ------------------------------------------------------------------
    def order_create(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(POST, "orders", query_params=query_params, body=body)

    def history(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(POST, "history", query_params=query_params, body=body)

    def custom_statuses(
        self,
        crm_id: str,
        status_id: str | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        params = _merge({"crm": crm_id, "id": status_id}, query_params)
        return self.request(GET, "custom-status/list", query_params=params)

    # ------------------------------------------------------------------
    # Filters and specifications
    # ------------------------------------------------------------------
    def filters(self, query_params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request(GET, "filter", query_params=query_params)

    def filter_facings(
        self,
        house_ids: Sequence[int] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        params = _merge({"houseId[]": list(house_ids) if house_ids else None}, query_params)
        return self.request(GET, "filter/facings", query_params=params)

    def filter_property_specifications(
        self, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(GET, "filter/property-specifications", query_params=query_params)

    def property_specifications(
        self,
        property_ids: Sequence[int] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        params = _merge(
            {"propertyIds[]": list(property_ids) if property_ids else None}, query_params
        )
        return self.request(GET, "property-specification", query_params=params)

    def property_specification_list(
        self, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(GET, "property-specification/list", query_params=query_params)

    def property_specification_house(
        self, house_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"houseId": house_id}, query_params)
        return self.request(GET, "property-specification/house", query_params=params)

    # ------------------------------------------------------------------
    # Reservation queue
    # ------------------------------------------------------------------
    def queue_reserve_list(
        self, property_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"propertyId": property_id}, query_params)
        return self.request(GET, "queue-reserve/list", query_params=params)

    def queue_reserve_delete(
        self,
        deal_queue_item_id: int,
        body: dict[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        params = _merge({"id": deal_queue_item_id}, query_params)
        return self.request(POST, "queue-reserve/delete", query_params=params, body=body)

    def queue_reserve_create(
        self,
        property_id: int,
        deal_id: int | str,
        body: dict[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        """Put a deal into the reservation queue of a property."""
        payload = _merge({"propertyId": property_id, "dealId": deal_id}, body)
        return self.request(POST, "queue-reserve", query_params=query_params, body=payload)

    def queue_reserve_change_position(
        self,
        source_queue_item_id: int,
        target_queue_item_id: int,
        body: dict[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        """Move a queue item to the position of another one."""
        payload = _merge(
            {"queueId": source_queue_item_id, "queueDropId": target_queue_item_id}, body
        )
        return self.request(
            POST, "queue-reserve/change-position", query_params=query_params, body=payload
        )

    # ------------------------------------------------------------------
    # Renders, users, stock versions
    # ------------------------------------------------------------------
    def renders(
        self, project_id: int | None = None, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        params = _merge({"projectId": project_id}, query_params)
        return self.request(GET, "render", query_params=params)

    def user_info(self, query_params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request(GET, "user/info", query_params=query_params)

    def user_access_update(
        self, user_id: int, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(PATCH, f"user/{user_id}/access", query_params=query_params, body=body)

    def user_password_forgot(
        self, user_id: int, query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(GET, f"user/{user_id}/password/forgot", query_params=query_params)

    def stock_versions_find(
        self, body: dict[str, Any], query_params: Mapping[str, Any] | None = None
    ) -> requests.Response:
        return self.request(POST, "versions/find", query_params=query_params, body=body)
