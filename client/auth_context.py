"""Process-wide authentication state for the mobile client.

One ``AuthContext`` is created at the application root and handed to every
screen. It mirrors the signed-in user and their bearer token to local
storage so a restart lands on the right screen.
"""
import json
import logging

import requests

from client.storage import USER_KEY, LocalStorage

logger = logging.getLogger(__name__)

HOME_ROUTE = "/(tabs)"
LOGIN_ROUTE = "/(auth)/login"
DEFAULT_TIMEOUT = 10


class AuthError(Exception):
    """Raised when the API rejects a login or registration."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthContext:
    def __init__(
        self,
        base_url: str,
        storage: LocalStorage,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user: dict | None = None
        self.token: str | None = None
        self.is_loading = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token is not None

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.get("isAdmin"))

    @property
    def landing_route(self) -> str:
        return HOME_ROUTE if self.is_authenticated else LOGIN_ROUTE

    def initialize(self) -> None:
        """Load the persisted session; must run before the first render."""
        try:
            raw = self.storage.get_item(USER_KEY)
            if raw:
                record = json.loads(raw)
                self.user = record["user"]
                self.token = record["token"]
        except (ValueError, KeyError, TypeError):
            logger.exception("Discarding unreadable stored session")
            self.user = None
            self.token = None
            self.storage.remove_item(USER_KEY)
        finally:
            self.is_loading = False

    def login(self, email: str, password: str) -> dict:
        return self._authenticate("/api/auth/login", {"email": email, "password": password})

    def register(self, name: str, email: str, password: str) -> dict:
        return self._authenticate(
            "/api/auth/register",
            {"name": name, "email": email, "password": password},
        )

    def logout(self) -> None:
        # Tokens are not revoked server-side; dropping them is the whole logout.
        self.storage.remove_item(USER_KEY)
        self.user = None
        self.token = None

    def request(self, method: str, path: str, **kwargs) -> requests.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        kwargs.setdefault("timeout", self.timeout)
        return self.session.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)

    def _authenticate(self, path: str, payload: dict) -> dict:
        self.is_loading = True
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
            data = _json_body(response)
            if not response.ok:
                message = data.get("error") or f"Request failed ({response.status_code})"
                raise AuthError(str(message), status_code=response.status_code)

            user = {
                "id": data["user"]["id"],
                "name": data["user"]["name"],
                "email": data["user"]["email"],
                "isAdmin": data["user"]["isAdmin"],
            }
            self.storage.set_item(USER_KEY, json.dumps({"user": user, "token": data["token"]}))
            self.user = user
            self.token = data["token"]
            return user
        finally:
            self.is_loading = False


def _json_body(response: requests.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
