"""KMA short-term forecast (getVilageFcst) client with retry handling."""

import logging
import os
import time
from xml.etree import ElementTree as ET

import httpx

from dorosee.config.defaults import (
    KMA_BASE_URL,
    PLACEHOLDER_SERVICE_KEY,
    SERVICE_KEY_ENV,
)
from dorosee.ingest.forecast_parser import parse_items
from dorosee.models.grid import ForecastWindow, GridCoordinate
from dorosee.models.weather import ForecastItem

logger = logging.getLogger(__name__)

VILAGE_FCST_PATH = "/getVilageFcst"
RESULT_OK = "00"
RESULT_NO_DATA = "03"
MASKED_KEY = "***API_KEY***"


class KmaError(Exception):
    """Base class for KMA forecast API failures."""


class KmaConfigError(KmaError):
    """Raised when the service key is missing or still the placeholder."""


class KmaHttpError(KmaError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class KmaResponseError(KmaError):
    """Raised when the body is not the JSON envelope we asked for."""


class KmaHtmlResponseError(KmaResponseError):
    """Gateway returned an HTML/XML error page, usually a bad service key."""


class KmaResultError(KmaError):
    def __init__(self, code: str | None, message: str):
        super().__init__(f"KMA error resultCode={code}: {message}")
        self.code = code


class KmaNoDataError(KmaResultError):
    """The requested slot has no items (not yet published or bad cell)."""


class KmaClient:
    def __init__(
        self,
        service_key: str | None = None,
        base_url: str = KMA_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        num_of_rows: int = 1000,
        page_no: int = 1,
    ):
        self.service_key = (service_key or os.environ.get(SERVICE_KEY_ENV, "")).strip()
        if not self.service_key or self.service_key == PLACEHOLDER_SERVICE_KEY:
            raise KmaConfigError(f"{SERVICE_KEY_ENV} not set")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.num_of_rows = num_of_rows
        self.page_no = page_no

    def build_params(self, grid: GridCoordinate, window: ForecastWindow) -> dict[str, str]:
        return {
            "serviceKey": self.service_key,
            "numOfRows": str(self.num_of_rows),
            "pageNo": str(self.page_no),
            "dataType": "JSON",
            "base_date": window.base_date,
            "base_time": window.base_time,
            "nx": str(grid.nx),
            "ny": str(grid.ny),
        }

    def get_vilage_forecast(
        self, grid: GridCoordinate, window: ForecastWindow
    ) -> list[ForecastItem]:
        """Fetch the short-term forecast items for one grid cell and slot.

        Retries on 503/429 and transport errors with exponential backoff.
        """
        url = f"{self.base_url}{VILAGE_FCST_PATH}"
        params = self.build_params(grid, window)
        logger.info(
            "KMA request nx=%d ny=%d base_date=%s base_time=%s",
            grid.nx, grid.ny, window.base_date, window.base_time,
        )

        resp = self._get_with_retry(url, params)
        if resp.status_code >= 400:
            body = resp.text[:200]
            logger.error("KMA %d: %s", resp.status_code, body)
            raise KmaHttpError(f"HTTP {resp.status_code}: {body}", status_code=resp.status_code)

        data = _decode_body(resp)
        items = parse_items(_extract_raw_items(data))
        if not items:
            raise KmaNoDataError(RESULT_NO_DATA, "no forecast items")
        logger.info("KMA returned %d items", len(items))
        return items

    def _get_with_retry(self, url: str, params: dict[str, str]) -> httpx.Response:
        headers = {"Accept": "application/json"}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(url, params=params, headers=headers, timeout=self.timeout)
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "KMA request error, retrying in %.1fs: %s",
                        delay, _mask(str(e), self.service_key),
                    )
                    time.sleep(delay)
                    continue
                raise
            if resp.status_code in (503, 429) and attempt < self.max_retries:
                delay = self.retry_base_delay * (2**attempt)
                logger.warning(
                    "KMA returned %d, retrying in %.1fs (attempt %d/%d)",
                    resp.status_code, delay, attempt + 1, self.max_retries,
                )
                time.sleep(delay)
                continue
            return resp

        raise AssertionError("unreachable")


def check_api_config(service_key: str | None = None) -> dict:
    """Report whether a usable service key is available, without a client."""
    key = (service_key or os.environ.get(SERVICE_KEY_ENV, "")).strip()
    return {
        "configured": bool(key) and key != PLACEHOLDER_SERVICE_KEY,
        "service": "기상청 단기예보 API",
        "key_length": len(key),
        "key_prefix": key[:10] + "..." if key else "N/A",
    }


def _mask(text: str, key: str) -> str:
    return text.replace(key, MASKED_KEY) if key else text


def _decode_body(resp: httpx.Response) -> dict:
    """Parse the JSON envelope and check its resultCode."""
    body = resp.text
    if "<html>" in body or "<OpenAPI_S" in body:
        raise KmaHtmlResponseError(_describe_xml_error(body))

    try:
        data = resp.json()
    except ValueError as e:
        logger.error("KMA non-JSON body: %s", body[:300])
        raise KmaResponseError("KMA response is not valid JSON") from e
    if not isinstance(data, dict):
        raise KmaResponseError("KMA response is not a JSON object")

    envelope = data.get("response") or {}
    if not isinstance(envelope, dict):
        raise KmaResponseError("KMA response envelope is not a JSON object")
    header = envelope.get("header") or {}
    if not isinstance(header, dict):
        raise KmaResponseError("KMA response header is not a JSON object")
    code = header.get("resultCode")
    if code != RESULT_OK:
        message = header.get("resultMsg") or "Unknown error"
        if code == RESULT_NO_DATA:
            raise KmaNoDataError(code, message)
        raise KmaResultError(code, message)
    return data


def _describe_xml_error(body: str) -> str:
    try:
        root = ET.fromstring(body.strip())
    except ET.ParseError:
        return "KMA returned HTML; check the service key"
    code = root.findtext(".//returnReasonCode") or root.findtext(".//resultCode")
    msg = root.findtext(".//returnAuthMsg") or root.findtext(".//resultMsg")
    return f"KMA returned an XML error page: code={code} msg={msg}"


def _extract_raw_items(data: dict) -> list[dict]:
    body = data["response"].get("body") or {}
    if not isinstance(body, dict):
        raise KmaResponseError("KMA response body is not a JSON object")
    items = body.get("items") or {}
    if isinstance(items, dict):
        items = items.get("item") or []
    return items if isinstance(items, list) else []
