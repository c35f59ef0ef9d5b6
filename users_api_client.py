"""Users API client.

This module defines a small client for the ``/users`` resource served
by ``users_api``.  The client uses the ``requests`` library internally
to make HTTP calls and exposes one method per operation:

* :meth:`UsersApiClient.list_users` – return every user.
* :meth:`UsersApiClient.get_user` – fetch a single user by id.
* :meth:`UsersApiClient.get_by_location` – follow a ``Location`` header.
* :meth:`UsersApiClient.create_user` – create a user with a chosen id.
* :meth:`UsersApiClient.update_user` – rename an existing user.
* :meth:`UsersApiClient.delete_user` – remove a user.

Expected negative answers (404, 409) are reported through return
values.  Any other unexpected status, or a transport failure, raises
:class:`UsersApiError`.

Running the module performs a small concurrent demo against a running
server::

    python users_api_client.py --base-url http://localhost:8080
"""

from __future__ import annotations

import argparse
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)


class UsersApiError(Exception):
    """Raised when the API answers with an unexpected status or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UsersApiClient:
    """Thin wrapper around the ``/users`` endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.  Any object with a
                compatible ``request`` method can be passed, which is how
                the tests drive the client against an in‑process app.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, url: str, *, json_body: Any | None = None):
        """Perform an HTTP request and return the raw response.

        ``url`` may be absolute (as found in ``Location`` headers) or a
        path relative to :attr:`base_url`.
        """
        if not url.startswith(("http://", "https://")):
            url = f"{self.base_url}{url}"
        logger.debug("Sending %s request to %s", method, url)
        try:
            return self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            raise UsersApiError(str(exc)) from exc

    @staticmethod
    def _unexpected(response: Any, operation: str) -> UsersApiError:
        message = f"{operation} answered {response.status_code}"
        logger.error("API request failed (%s): %s", response.status_code, message)
        return UsersApiError(message, status_code=response.status_code)

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def list_users(self) -> List[Dict[str, Any]]:
        response = self._request("GET", "/users")
        if response.status_code == 200:
            return response.json()
        raise self._unexpected(response, "list users")

    def get_user(self, user_id: int) -> Optional[Dict[str, Any]]:
        """Return the user as a dict, or ``None`` if it does not exist."""
        return self.get_by_location(f"/users/{user_id}")

    def get_by_location(self, location: str) -> Optional[Dict[str, Any]]:
        response = self._request("GET", location)
        if response.status_code == 200:
            return response.json()
        if response.status_code == 404:
            return None
        raise self._unexpected(response, f"get {location}")

    def create_user(self, user_id: int, name: str) -> Tuple[int, Optional[str]]:
        """Create a user.

        Returns:
            A tuple ``(status_code, location)``.  ``status_code`` is 201
            when the user was created and 409 when the id is taken; in
            both cases ``location`` points at the user with that id.
        """
        response = self._request("POST", "/users", json_body={"id": user_id, "name": name})
        if response.status_code in (201, 409):
            return response.status_code, response.headers.get("Location")
        raise self._unexpected(response, f"create user {user_id}")

    def update_user(self, user_id: int, name: str) -> bool:
        """Rename a user.  Returns ``False`` if there is no user with this id."""
        response = self._request("PUT", "/users", json_body={"id": user_id, "name": name})
        if response.status_code == 204:
            return True
        if response.status_code == 404:
            return False
        raise self._unexpected(response, f"update user {user_id}")

    def delete_user(self, user_id: int) -> bool:
        """Delete a user.  Returns ``False`` if there is no user with this id."""
        response = self._request("DELETE", f"/users/{user_id}")
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise self._unexpected(response, f"delete user {user_id}")


# ----------------------------------------------------------------------
# Demo
# ----------------------------------------------------------------------
def create_users(client: UsersApiClient, user_ids: Iterable[int]) -> None:
    """Create ``Foo<id>`` users one after another and read each one back."""
    for user_id in user_ids:
        status, location = client.create_user(user_id, f"Foo{user_id}")
        if status != 201:
            logger.warning("User %d was not created (status %d), it lives at %s", user_id, status, location)
            continue
        logger.info("Created user %d, looking it up at %s", user_id, location)
        logger.info("Created user by location: %s", client.get_by_location(location))


def run_demo(client: UsersApiClient, *, workers: int = 8) -> None:
    """Create, list and look up users concurrently, then list once more."""
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(create_users, client, range(3, 6))]
        futures.append(pool.submit(lambda: logger.info("users = %s", client.list_users())))
        for user_id in range(1, 7):
            futures.append(
                pool.submit(lambda uid=user_id: logger.info("user = %s", client.get_user(uid)))
            )
        for future in futures:
            future.result()
    logger.info("users = %s", client.list_users())


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Exercise a running Users API.")
    parser.add_argument("--base-url", default="http://localhost:8080")
    parser.add_argument("--workers", type=int, default=8)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s: %(message)s - %(threadName)s",
    )
    run_demo(UsersApiClient(base_url=args.base_url), workers=args.workers)


if __name__ == "__main__":
    main()
