"""Product Archive API client.

A thin wrapper around the REST API exposed by
``product_archive_api``.  The client uses the ``requests`` library and
exposes one method per operation:

* :meth:`list_products`, :meth:`get_product`, :meth:`create_product`,
  :meth:`update_product`, :meth:`delete_product` for the product list.
* :meth:`upload_file` and :meth:`list_files` for raw file storage.
* :meth:`compress_file`, :meth:`extract_archive` and
  :meth:`list_archives` for ZIP archives.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with keys ``status_code`` and ``message``.  Note that the
server answers successful product lookups with ``302 Found`` and the
data in the body; the client treats those as successes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class ProductArchiveClient:
    """Client for the product and file archive API."""

    PRODUCTS_PATH = "/api/v1/products"
    FILES_PATH = "/api/files"

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8081``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        files: Any | None = None,
        data: Dict[str, Any] | None = None,
    ) -> Result:
        """Perform an HTTP request to the API.

        Redirects are not followed: the server uses ``302`` as a
        success status without a ``Location`` header.  JSON responses
        are decoded, anything else is returned as text.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                files=files,
                data=data,
                timeout=self.timeout,
                allow_redirects=False,
            )
            response.raise_for_status()
            if not response.content:
                return None, None
            if response.headers.get("content-type", "").startswith("application/json"):
                return response.json(), None
            return response.text, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def list_products(self) -> Result:
        return self._request("GET", self.PRODUCTS_PATH)

    def get_product(self, product_id: int) -> Result:
        return self._request("GET", f"{self.PRODUCTS_PATH}/{product_id}")

    def create_product(
        self,
        product_id: int,
        name: str,
        quantity: int,
        price: float,
        image_uri: Optional[str] = None,
    ) -> Result:
        body = {
            "id": product_id,
            "name": name,
            "quantity": quantity,
            "price": price,
            "imageUri": image_uri,
        }
        return self._request("POST", self.PRODUCTS_PATH, json_body=body)

    def update_product(self, product_id: int, name: str, quantity: int, price: float) -> Result:
        params = {"name": name, "quantity": quantity, "price": price}
        return self._request("PUT", f"{self.PRODUCTS_PATH}/{product_id}", params=params)

    def delete_product(self, product_id: int) -> Result:
        return self._request("DELETE", f"{self.PRODUCTS_PATH}/{product_id}")

    # ------------------------------------------------------------------
    # Files and archives
    # ------------------------------------------------------------------
    def upload_file(self, file_name: str, content: bytes) -> Result:
        return self._request(
            "POST", f"{self.FILES_PATH}/upload", files={"file": (file_name, content)}
        )

    def list_files(self) -> Tuple[List[str], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", self.FILES_PATH)
        return (data or []), error

    def compress_file(self, file_name: str, content: bytes) -> Result:
        return self._request(
            "POST", f"{self.FILES_PATH}/compress", files={"file": (file_name, content)}
        )

    def extract_archive(self, zip_file_name: str) -> Result:
        return self._request("POST", f"{self.FILES_PATH}/extract/{zip_file_name}")

    def list_archives(self) -> Result:
        return self._request("GET", f"{self.FILES_PATH}/download/zip/list")
