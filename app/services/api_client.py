"""
EarthSafe API Client

Thin async HTTP wrapper over the EarthSafe REST API, used by the mobile
app backend-for-frontend and scripts.

Mock mode:
- With use_mock_data on, read calls return the static fixtures in
  app.services.mock_data and never touch the network.
- When a live list call fails or returns an empty list, the fixtures are
  returned instead so screens always have something to show.
- Non-list calls propagate errors to the caller.
"""

import copy
import logging
import uuid
from typing import Any, Dict, List, Optional, Union

import httpx

from app.config import settings
from app.services import mock_data

logger = logging.getLogger(__name__)

OrgId = Union[str, uuid.UUID]


class EarthSafeClient:
    """Client for the EarthSafe REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        use_mock_data: Optional[bool] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token = token
        self.use_mock_data = settings.use_mock_data if use_mock_data is None else use_mock_data
        self.timeout = timeout or settings.api_timeout_seconds

    def set_use_mock_data(self, value: bool) -> None:
        self.use_mock_data = value

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: non-2xx response
            httpx.RequestError: network failure or timeout
        """
        url = f"{self.base_url}{endpoint}"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.request(
                method,
                url,
                headers=self._get_headers(),
                json=payload,
                params=params,
            )
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()

    async def _get_list(self, endpoint: str, fixtures: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if self.use_mock_data:
            return copy.deepcopy(fixtures)

        try:
            data = await self._request("GET", endpoint)
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.warning(f"GET {endpoint} failed ({e}); using mock data")
            return copy.deepcopy(fixtures)

        if not data:
            logger.warning(f"GET {endpoint} returned no data; using mock data")
            return copy.deepcopy(fixtures)
        return data

    # ===========================================
    # AUTHENTICATION
    # ===========================================

    async def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request("POST", "/users/register", user_data)
        self.token = data.get("access_token")
        return data

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and keep the access token for later calls."""
        if self.use_mock_data:
            data = copy.deepcopy(mock_data.MOCK_AUTH)
        else:
            data = await self._request("POST", "/users/login", {"email": email, "password": password})
        self.token = data.get("access_token")
        return data

    async def logout(self) -> None:
        try:
            if not self.use_mock_data and self.token:
                await self._request("POST", "/users/logout")
        finally:
            self.token = None

    async def get_current_user(self) -> Dict[str, Any]:
        if self.use_mock_data:
            return copy.deepcopy(mock_data.MOCK_USER)
        return await self._request("GET", "/users/profile")

    # ===========================================
    # ORGANIZATIONS
    # ===========================================

    async def get_orgs(self) -> List[Dict[str, Any]]:
        return await self._get_list("/orgs/my-orgs", mock_data.MOCK_ORGS)

    async def get_buyers(self) -> List[Dict[str, Any]]:
        return await self._get_list("/orgs/buyers", mock_data.MOCK_BUYERS)

    async def create_org(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/orgs", data)

    # ===========================================
    # SHIFTS
    # ===========================================

    async def get_shifts(self, org_id: OrgId) -> List[Dict[str, Any]]:
        return await self._get_list(f"/orgs/{org_id}/shifts", mock_data.MOCK_SHIFTS)

    async def get_shift_details(self, shift_id: OrgId) -> Dict[str, Any]:
        return await self._request("GET", f"/shifts/{shift_id}")

    async def create_shift(self, org_id: OrgId, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/orgs/{org_id}/shifts", data)

    async def add_timesheet(self, shift_id: OrgId, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/shifts/{shift_id}/timesheets", data)

    async def add_material_movement(self, shift_id: OrgId, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/shifts/{shift_id}/material", data)

    # ===========================================
    # FINANCE
    # ===========================================

    async def get_sales(self, org_id: OrgId) -> List[Dict[str, Any]]:
        return await self._get_list(f"/orgs/{org_id}/sales", mock_data.MOCK_SALES)

    async def create_sale(self, org_id: OrgId, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/orgs/{org_id}/sales", data)

    async def get_expenses(self, org_id: OrgId) -> List[Dict[str, Any]]:
        return await self._get_list(f"/orgs/{org_id}/expenses", mock_data.MOCK_EXPENSES)

    async def create_expense(self, org_id: OrgId, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/orgs/{org_id}/expenses", data)

    async def get_payroll(self, org_id: OrgId) -> List[Dict[str, Any]]:
        return await self._get_list(f"/orgs/{org_id}/payroll", mock_data.MOCK_PAYROLL)

    async def get_inventory(self, org_id: OrgId) -> List[Dict[str, Any]]:
        return await self._get_list(f"/orgs/{org_id}/inventory", mock_data.MOCK_INVENTORY)

    # ===========================================
    # COMPLIANCE & LENDING
    # ===========================================

    async def get_compliance_documents(self, org_id: OrgId) -> List[Dict[str, Any]]:
        return await self._get_list(
            f"/orgs/{org_id}/compliance/documents",
            mock_data.MOCK_COMPLIANCE_DOCUMENTS,
        )

    async def get_loans(self, org_id: OrgId) -> List[Dict[str, Any]]:
        return await self._get_list(f"/orgs/{org_id}/loans", mock_data.MOCK_LOANS)

    async def apply_for_loan(self, org_id: OrgId, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/orgs/{org_id}/loans", data)

    async def get_financial_health(self, org_id: OrgId) -> Dict[str, Any]:
        if self.use_mock_data:
            return copy.deepcopy(mock_data.MOCK_FINANCIAL_HEALTH)
        return await self._request("GET", f"/orgs/{org_id}/financial-health")
