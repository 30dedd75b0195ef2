"""InfluxDB 2.x Flux query API client returning raw CSV."""

import logging

import httpx

from sensormonitor.config.schema import InfluxConfig

logger = logging.getLogger(__name__)

QUERY_ENDPOINT = "/api/v2/query"
HEALTH_ENDPOINT = "/health"
FLUX_CONTENT_TYPE = "application/vnd.flux"
CSV_ACCEPT = "application/csv"


class InfluxClientError(Exception):
    """Raised when the InfluxDB server could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InfluxClient:
    """Thin async wrapper around the InfluxDB ``/api/v2/query`` endpoint.

    One instance per application. Pass ``http_client`` to share or mock the
    underlying ``httpx.AsyncClient``; otherwise the client owns one and
    closes it in ``aclose()``.
    """

    def __init__(
        self,
        base_url: str,
        org: str,
        token: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.org = org
        self.token = token
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_config(
        cls, config: InfluxConfig, http_client: httpx.AsyncClient | None = None
    ) -> "InfluxClient":
        return cls(
            base_url=config.base_url,
            org=config.org,
            token=config.token,
            timeout=config.timeout_seconds,
            http_client=http_client,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "InfluxClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Token {self.token}",
            "Accept": CSV_ACCEPT,
            "Content-Type": FLUX_CONTENT_TYPE,
        }

    async def query_csv(self, flux: str) -> str | None:
        """Run a Flux query and return the CSV body.

        Returns None on any non-2xx status. Raises InfluxClientError if the
        request could not be sent or no response arrived.
        """
        url = f"{self.base_url}{QUERY_ENDPOINT}"
        try:
            resp = await self._client.post(
                url,
                params={"org": self.org},
                headers=self._headers(),
                content=flux.encode(),
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            logger.error("InfluxDB request failed: POST %s -> %s", url, e)
            raise InfluxClientError(f"Request failed: {e}") from e

        logger.debug("InfluxDB HTTP status: %d", resp.status_code)
        if not resp.is_success:
            logger.error("InfluxDB query %d: %s", resp.status_code, resp.text)
            return None

        logger.debug("CSV response:\n%s", resp.text)
        return resp.text

    async def ping(self) -> bool:
        """True if the server's health endpoint answers 200."""
        try:
            resp = await self._client.get(
                f"{self.base_url}{HEALTH_ENDPOINT}", timeout=self.timeout
            )
        except httpx.RequestError as e:
            logger.warning("InfluxDB health check failed: %s", e)
            return False
        return resp.status_code == 200
