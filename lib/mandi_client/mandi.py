from __future__ import annotations

from typing import Any

import httpx

from .api import ApiService
from .session import SessionManager


class MandiService:
    """Ledger lookups scoped to the logged-in user's company."""

    def __init__(self, api: ApiService, session: SessionManager):
        self._api = api
        self._session = session

    def _company_id(self) -> Any:
        user = self._session.get_logged_in_user()
        return (user or {}).get("companyid") or None

    async def get_farmers(self) -> httpx.Response:
        return await self._api.get("/mandi-ledger/farmers", {"companyid": self._company_id()})

    async def get_customers(self) -> httpx.Response:
        return await self._api.get("/mandi-ledger/customers", {"companyid": self._company_id()})

    async def get_customer_bills(self) -> httpx.Response:
        return await self._api.get("/customerbill/list", {"companyid": self._company_id()})

    async def get_farmer_bills(self) -> httpx.Response:
        return await self._api.get("/farmerbill", {"companyid": self._company_id()})

    async def get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        return await self._api.get(url, params)
