"""
Objects API Client - CRUD against the restful-api.dev ``/objects`` collection.

Translates HTTP responses into ObjectRecord instances or typed errors.
No retries and no caching: every call is exactly one request.
"""
from typing import Any, List, Optional

import requests

from .config import get_settings
from .errors import ApiError, MalformedResponse, NetworkUnavailable, NotFound, RequestFailed
from .models.schemas import ObjectRecord
from .utils.logger import get_logger

logger = get_logger(__name__)


class ObjectsApiClient:
    """
    Client for a single REST collection endpoint.

    Provides methods to:
    - List all objects
    - Get one object by ID
    - Create, update and delete objects
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the objects API client.

        Args:
            base_url: Collection URL (default: CARGOPRO_API_BASE_URL)
            timeout: Per-request timeout in seconds (default: CARGOPRO_REQUEST_TIMEOUT)
            session: requests.Session to reuse (auto-created if not provided)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()

    def __enter__(self) -> "ObjectsApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    @property
    def headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _url(self, object_id: Optional[str] = None) -> str:
        if object_id is None:
            return self.base_url
        return f"{self.base_url}/{object_id}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Perform one HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: Absolute URL
            **kwargs: Additional arguments for requests (json=...)

        Returns:
            The raw response; status handling is left to the caller.

        Raises:
            NetworkUnavailable: on any transport-level failure
        """
        logger.debug("🌐 %s %s", method, url)
        try:
            response = self.session.request(
                method, url, headers=self.headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            logger.warning("❌ %s %s transport error: %s", method, url, exc)
            raise NetworkUnavailable() from exc
        logger.debug("📡 %s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse() from exc

    def _decode_object(self, response: requests.Response) -> ObjectRecord:
        try:
            return ObjectRecord.from_api(self._json(response))
        except ValueError as exc:
            # pydantic's ValidationError is a ValueError
            raise MalformedResponse() from exc

    @staticmethod
    def _fail(response: requests.Response, operation: str, object_id: Optional[str] = None) -> ApiError:
        if response.status_code == 404:
            logger.warning(f"❌ {operation} object not found: {object_id}")
            return NotFound(object_id)
        logger.warning(f"❌ {operation} failed with status {response.status_code}: {response.text}")
        return RequestFailed(response.status_code, response.text, operation)

    def list_objects(self) -> List[ObjectRecord]:
        """
        Fetch every object the list endpoint returns.

        A single malformed element fails the whole call.

        Returns:
            List of ObjectRecord in server order
        """
        response = self._request("GET", self._url())
        if response.status_code != 200:
            raise RequestFailed(response.status_code, response.text, "GET")

        items = self._json(response)
        if not isinstance(items, list):
            raise MalformedResponse("Expected a JSON array")
        try:
            objects = [ObjectRecord.from_api(item) for item in items]
        except ValueError as exc:
            raise MalformedResponse() from exc

        logger.info(f"✅ Fetched {len(objects)} objects")
        return objects

    def get_object(self, object_id: str) -> ObjectRecord:
        """
        Fetch one object by ID.

        Raises:
            NotFound: the server answered 404
            RequestFailed: any other non-200 status
        """
        response = self._request("GET", self._url(object_id))
        if response.status_code != 200:
            raise self._fail(response, "GET", object_id)
        record = self._decode_object(response)
        logger.info(f"✅ Fetched object: {record.name}")
        return record

    def create_object(self, record: ObjectRecord) -> ObjectRecord:
        """
        Create an object. The server response is authoritative (it carries the new id).

        Args:
            record: Object to create; its id, if any, is not sent

        Returns:
            The created object as returned by the server
        """
        response = self._request("POST", self._url(), json=record.to_request_body())
        if response.status_code not in (200, 201):
            raise RequestFailed(response.status_code, response.text, "CREATE")
        created = self._decode_object(response)
        logger.info(f"✅ Created object with ID: {created.id}")
        return created

    def update_object(self, object_id: str, record: ObjectRecord) -> ObjectRecord:
        """
        Replace an object with PUT. Only name and data go in the body.

        Returns:
            The updated object as returned by the server
        """
        response = self._request(
            "PUT", self._url(object_id), json=record.to_request_body()
        )
        if response.status_code != 200:
            raise self._fail(response, "UPDATE", object_id)
        updated = self._decode_object(response)
        logger.info(f"✅ Updated object: {updated.name}")
        return updated

    def delete_object(self, object_id: str) -> bool:
        """
        Delete an object by ID.

        Returns:
            True when the server answered 200
        """
        response = self._request("DELETE", self._url(object_id))
        if response.status_code != 200:
            raise self._fail(response, "DELETE", object_id)
        logger.info(f"✅ Deleted object with ID: {object_id}")
        return True


def get_client() -> ObjectsApiClient:
    """
    Convenience function to get a client configured from settings.

    Returns:
        ObjectsApiClient instance
    """
    return ObjectsApiClient()
