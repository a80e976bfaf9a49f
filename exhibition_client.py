"""Exhibition registry API client.

A thin wrapper around the registry's HTTP API built on the ``requests``
library.  Every operation is exposed as a method returning a tuple
``(data, error)``:

* on success ``data`` holds the parsed JSON body (a confirmation
  message, a record or a list of records) and ``error`` is ``None``;
* on failure ``data`` is ``None`` (or an empty list for listing
  methods) and ``error`` is a dictionary with ``status_code``, ``tag``
  and ``message`` keys.  ``tag`` is the registry error tag (for example
  ``"already-registered"``) or ``None`` for transport errors.

The caller principal is asserted by passing a token issued with
``create_token.py`` as ``api_key``; without it requests are anonymous.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


def _segment(name: str) -> str:
    """Percent-encode a name for use as a single URL path segment."""
    return requests.utils.quote(name, safe="")


class ExhibitionAPI:
    """Client for the exhibition registry API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL including the version prefix, e.g.
                ``https://example.com/api/v1``.
            api_key: Optional caller token.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` is included in
                all requests.
            session: Optional session object.  Anything exposing a
                requests-compatible ``request`` method is accepted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/users/``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "tag": None, "message": str(exc)}

        if response.status_code >= 400:
            error = self._parse_error(response)
            logger.error(
                "API request %s %s failed (%s, %s): %s",
                method, path, error["status_code"], error["tag"], error["message"],
            )
            return None, error
        if response.content:
            return response.json(), None
        return None, None

    @staticmethod
    def _parse_error(response: Any) -> Dict[str, Any]:
        tag = None
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = None
        if isinstance(detail, dict):
            tag = detail.get("tag")
            message = detail.get("message") or str(detail)
        elif detail:
            message = str(detail)
        else:
            message = response.text or f"HTTP {response.status_code}"
        return {"status_code": response.status_code, "tag": tag, "message": message}

    @staticmethod
    def _message(result: Result) -> Result:
        data, error = result
        if error:
            return None, error
        return (data or {}).get("message"), None

    @staticmethod
    def _listing(result: Result) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = result
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_user(self, username: str) -> Result:
        return self._request("GET", f"/users/{_segment(username)}")

    def register_user(self, username: str, email: str, usercontacts: str) -> Result:
        """Register a user.  Returns the confirmation message on success."""
        payload = {"username": username, "email": email, "usercontacts": usercontacts}
        return self._message(self._request("POST", "/users/", json_body=payload))

    def update_user_profile(
        self,
        username: str,
        *,
        email: Optional[str] = None,
        usercontacts: Optional[str] = None,
    ) -> Result:
        payload = {k: v for k, v in (("email", email), ("usercontacts", usercontacts)) if v is not None}
        return self._message(self._request("PUT", f"/users/{_segment(username)}", json_body=payload))

    def list_user_products(self, username: str) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._listing(self._request("GET", f"/users/{_segment(username)}/products"))

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def register_product(self, name: str, description: str, owner: str) -> Result:
        payload = {"name": name, "description": description, "owner": owner}
        return self._message(self._request("POST", "/products/", json_body=payload))

    def list_products(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._listing(self._request("GET", "/products/"))

    def search_product(self, productname: str) -> Result:
        return self._request("GET", "/products/search", params={"productname": productname})

    def comment_on_product(self, productname: str, by: str, comment: str) -> Result:
        payload = {"productname": productname, "by": by, "comment": comment}
        return self._message(self._request("POST", "/products/comments", json_body=payload))

    def like_product(self, productname: str) -> Result:
        return self._message(
            self._request("POST", "/products/likes", json_body={"productname": productname})
        )

    def delete_product(self, productname: str) -> Result:
        return self._message(self._request("DELETE", f"/products/{_segment(productname)}"))

    # ------------------------------------------------------------------
    # Questions and enquiries
    # ------------------------------------------------------------------
    def ask_question(self, question: str, useremail: str) -> Result:
        payload = {"question": question, "useremail": useremail}
        return self._message(self._request("POST", "/questions/", json_body=payload))

    def list_questions(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        return self._listing(self._request("GET", "/questions/"))

    def enquire_about_product(self, productname: str, useremail: str, enquire: str) -> Result:
        payload = {"productname": productname, "useremail": useremail, "enquire": enquire}
        return self._message(self._request("POST", "/enquiries/", json_body=payload))

    def list_enquiries(
        self, productname: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        params = {"productname": productname} if productname else None
        return self._listing(self._request("GET", "/enquiries/", params=params))
