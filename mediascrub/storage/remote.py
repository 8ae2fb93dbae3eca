"""HTTP object store client."""

import logging
from typing import Dict, Optional
from urllib.parse import quote, unquote

import requests

from mediascrub._version import __version__
from mediascrub.exceptions import StorageAPIError, StorageNotFoundError
from mediascrub.storage.base import ObjectStore, StoredObject

logger = logging.getLogger(__name__)

METADATA_HEADER_PREFIX = "X-Object-Meta-"


class HttpObjectStore(ObjectStore):
    """Object store reached over plain HTTP PUT/GET/HEAD.
    
    Objects live at ``<base_url>/<key>``. User metadata travels as
    ``X-Object-Meta-<name>`` headers with UTF-8 percent-encoded values, the
    content type as ``Content-Type``. Works against any store that accepts
    presigned or token-authenticated PUTs (S3-compatible gateways, Swift,
    simple upload servers).
    
    Attributes:
        base_url: Bucket or container URL
        timeout: Request timeout in seconds
        headers: Extra headers sent with every request (e.g. Authorization)
    """
    
    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        headers: Optional[Dict[str, str]] = None
    ) -> None:
        """Initialize HTTP object store.
        
        Args:
            base_url: Bucket or container URL
            timeout: Request timeout in seconds
            headers: Extra headers sent with every request
            
        Raises:
            StorageAPIError: If base_url is empty
        """
        if not base_url:
            raise StorageAPIError("base_url is required for the HTTP object store")
        
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = dict(headers or {})
        super().__init__()
    
    def _url(self, key: str) -> str:
        return f"{self.base_url}/{quote(key)}"
    
    def _request(
        self,
        method: str,
        key: str,
        data: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> requests.Response:
        """Send a request for one object.
        
        Args:
            method: HTTP method (PUT, GET, HEAD)
            key: Object key
            data: Request body
            headers: Additional headers
            
        Returns:
            Response object
            
        Raises:
            StorageAPIError: If the request fails
            StorageNotFoundError: If the object does not exist (404)
        """
        url = self._url(key)
        
        request_headers = {"User-Agent": f"mediascrub/{__version__}"}
        request_headers.update(self.headers)
        if headers:
            request_headers.update(headers)
        
        logger.debug(f"Object store {method} {url}")
        
        try:
            response = requests.request(
                method=method,
                url=url,
                data=data,
                headers=request_headers,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise StorageAPIError(
                f"Request timeout after {self.timeout} seconds: {key}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise StorageAPIError(f"Request failed: {e}") from e
        except ValueError as e:
            # e.g. header values http.client cannot encode
            raise StorageAPIError(f"Invalid request for {key}: {e}") from e
        
        logger.debug(f"  Response: {response.status_code}")
        
        if response.status_code == 404:
            raise StorageNotFoundError(
                f"Object not found: {key}",
                status_code=404,
                response=response.text or None
            )
        elif not response.ok:
            raise StorageAPIError(
                f"{method} {key} failed with status {response.status_code}",
                status_code=response.status_code,
                response=response.text or None
            )
        
        return response
    
    def put(
        self,
        key: str,
        data: bytes,
        metadata: Optional[Dict[str, str]] = None,
        content_type: Optional[str] = None
    ) -> StoredObject:
        headers = {
            f"{METADATA_HEADER_PREFIX}{name}": quote(str(value), safe="")
            for name, value in (metadata or {}).items()
        }
        if content_type:
            headers["Content-Type"] = content_type
        
        self._request("PUT", key, data=data, headers=headers)
        logger.debug(f"Uploaded {key} ({len(data)} bytes)")
        
        return StoredObject(
            key=key,
            data=data,
            metadata=dict(metadata or {}),
            content_type=content_type,
            location=self._url(key),
        )
    
    def get(self, key: str) -> StoredObject:
        response = self._request("GET", key)
        
        metadata = {}
        for name, value in response.headers.items():
            if name.lower().startswith(METADATA_HEADER_PREFIX.lower()):
                metadata[name[len(METADATA_HEADER_PREFIX):]] = unquote(value)
        
        return StoredObject(
            key=key,
            data=response.content,
            metadata=metadata,
            content_type=response.headers.get("Content-Type"),
            location=self._url(key),
        )
    
    def exists(self, key: str) -> bool:
        try:
            self._request("HEAD", key)
        except StorageNotFoundError:
            return False
        return True
    
    def __repr__(self) -> str:
        return f"<HttpObjectStore {self.base_url}>"
