"""Home Assistant state gateway implementation - Infrastructure layer."""

from __future__ import annotations

from typing import Dict

import httpx

from hass_relay.domain.entities.hass import HassResponse
from hass_relay.domain.gateways.hass_state_gateway import IHassStateGateway
from hass_relay.shared import get_logger

logger = get_logger(__name__)


class HassStateGateway(IHassStateGateway):
    """HTTP client for the Home Assistant REST state endpoint."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 10.0,
        verify_ssl: bool = True,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            base_url: Hub base URL (e.g. ``https://hass.local:8123``)
            token: Long-lived access token
            timeout: Per-request timeout in seconds
            verify_ssl: Verify the hub's TLS certificate
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._verify_ssl = verify_ssl

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get_state(self, entity_id: str) -> HassResponse:
        return await self._request("GET", f"/api/states/{entity_id}")

    async def post_state(self, entity_id: str, body: str) -> HassResponse:
        return await self._request("POST", f"/api/states/{entity_id}", content=body)

    async def ping(self) -> bool:
        response = await self._request("GET", "/api/")
        if response.ok:
            logger.info("hass.ping.ok", url=self._base_url)
        else:
            logger.warning(
                "hass.ping.failed",
                url=self._base_url,
                status_code=response.status_code,
            )
        return response.ok

    def _build_headers(self, *, include_content_type: bool) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self._token}"}
        if include_content_type:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self, method: str, path: str, content: str | None = None
    ) -> HassResponse:
        url = f"{self._base_url}{path}"
        headers = self._build_headers(include_content_type=content is not None)

        logger.debug("hass.state.request", method=method, url=url)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, verify=self._verify_ssl
            ) as client:
                if method == "GET":
                    response = await client.get(url, headers=headers)
                else:
                    response = await client.post(url, headers=headers, content=content)
                response.raise_for_status()
                return HassResponse(status_code=response.status_code, body=response.text)

        except httpx.HTTPStatusError as exc:
            logger.warning(
                "hass.state.http_error",
                method=method,
                url=url,
                status_code=exc.response.status_code,
                response_text=exc.response.text,
            )
            return HassResponse(status_code=exc.response.status_code)

        except httpx.RequestError as exc:
            logger.error(
                "hass.state.request_error",
                method=method,
                url=url,
                error=str(exc),
            )
            return HassResponse(status_code=None)
