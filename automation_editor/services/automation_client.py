"""
Automation API Client
Submits serialized automations to the persistence API
"""
from typing import Any, Dict, Optional, Union

import httpx

from automation_editor.core.config import get_settings
from automation_editor.core.errors import AutomationApiError
from automation_editor.core.logging import get_logger
from automation_editor.schemas.api_models import AutomationPayload

logger = get_logger(__name__)

WORKFLOWS_PATH = "/api/workflows"


class AutomationApiClient:
    """
    Async client for the persistence API

    One call per save: no retries, no timeout, no cancellation. Any transport
    error or non-2xx response becomes an AutomationApiError.

    Usage:
        client = AutomationApiClient()
        result = await client.save_automation(payload)             # create
        result = await client.save_automation(payload, "42")       # update
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.AUTOMATION_API_BASE_URL).rstrip("/")
        self.token = token if token is not None else settings.AUTOMATION_API_TOKEN
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def save_automation(
        self,
        payload: AutomationPayload,
        automation_id: Optional[Union[int, str]] = None
    ) -> Dict[str, Any]:
        """
        Create or update an automation

        Args:
            payload: Serialized automation
            automation_id: Existing automation id, None to create

        Returns:
            Response JSON of the persistence API ({} for empty bodies)

        Raises:
            AutomationApiError: On transport failure or non-2xx status
        """
        if automation_id is None:
            method, path = "POST", WORKFLOWS_PATH
        else:
            method, path = "PUT", f"{WORKFLOWS_PATH}/{automation_id}"

        logger.info(f"{method} {path}: '{payload.name}'")

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=None,
                transport=self._transport
            ) as client:
                response = await client.request(
                    method,
                    path,
                    json=payload.to_payload(),
                    headers=self._headers()
                )

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Automation API unreachable: {e}")
            raise AutomationApiError(f"Automation API request failed: {e}")

        if response.is_error:
            logger.error(f"Automation API returned {response.status_code}: {response.text}")
            raise AutomationApiError(
                f"Automation API returned status {response.status_code}",
                status_code=response.status_code
            )

        if not response.content:
            return {}

        try:
            data = response.json()
        except ValueError:
            logger.warning("Automation API returned a non-JSON body")
            return {}

        return data if isinstance(data, dict) else {"data": data}
