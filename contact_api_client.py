"""Contact Management API client.

A thin wrapper around ``requests`` for scripts and integrations that
talk to the Contact Management API over HTTP.  It hides the response
envelope: every call returns a tuple ``(data, error)`` where ``data``
is the content of the ``data`` key on success and ``error`` is a
dictionary with ``status_code`` and ``message`` on failure.

The client remembers the token returned by :meth:`login` and sends it
in the ``Authorization`` header of every subsequent request::

    client = ContactApiClient(base_url="http://localhost:8000/api")
    client.login("khannedy", "rahasia")
    contact, error = client.create_contact({"first_name": "Eko"})
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class ContactApiClient:
    """Client for the users and contacts endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL including the API prefix, e.g.
                ``https://example.com/api``.
            token: Optional session token obtained from a previous login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Perform an HTTP request and return ``(body, error)``.

        ``body`` is the whole decoded JSON response so callers can read
        keys other than ``data`` (e.g. ``paging``).
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = self.token
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json(), None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message: Any = ""
            if exc.response is not None:
                try:
                    message = exc.response.json().get("errors")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _call(self, method: str, path: str, **kwargs: Any) -> Result:
        body, error = self._request(method, path, **kwargs)
        if error:
            return None, error
        return body.get("data"), None

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def register(self, username: str, password: str, name: str) -> Result:
        """Register a new user.  Returns the public user view."""
        return self._call(
            "POST", "/users", json_body={"username": username, "password": password, "name": name}
        )

    def login(self, username: str, password: str) -> Result:
        """Log in and keep the returned token for later calls."""
        data, error = self._call(
            "POST", "/users/login", json_body={"username": username, "password": password}
        )
        if data:
            self.token = data.get("token")
        return data, error

    def current_user(self) -> Result:
        return self._call("GET", "/users/current")

    def update_current_user(self, *, name: Optional[str] = None, password: Optional[str] = None) -> Result:
        payload = {key: value for key, value in (("name", name), ("password", password)) if value is not None}
        return self._call("PATCH", "/users/current", json_body=payload)

    def logout(self) -> Result:
        """Invalidate the session token on the server and forget it locally."""
        data, error = self._call("DELETE", "/users/current")
        if not error:
            self.token = None
        return data, error

    # ------------------------------------------------------------------
    # Contact operations
    # ------------------------------------------------------------------
    def create_contact(self, payload: Dict[str, Any]) -> Result:
        return self._call("POST", "/contacts", json_body=payload)

    def get_contact(self, contact_id: int) -> Result:
        return self._call("GET", f"/contacts/{contact_id}")

    def update_contact(self, contact_id: int, payload: Dict[str, Any]) -> Result:
        return self._call("PUT", f"/contacts/{contact_id}", json_body=payload)

    def delete_contact(self, contact_id: int) -> Result:
        return self._call("DELETE", f"/contacts/{contact_id}")

    def search_contacts(
        self,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        page: int = 1,
        size: int = 10,
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Search the current user's contacts.

        Returns:
            A tuple ``(contacts, paging, error)``.  ``contacts`` is empty
            on failure.
        """
        params: Dict[str, Any] = {"page": page, "size": size}
        for key, value in (("name", name), ("email", email), ("phone", phone)):
            if value is not None:
                params[key] = value
        body, error = self._request("GET", "/contacts", params=params)
        if error:
            return [], None, error
        return body.get("data", []), body.get("paging"), None
