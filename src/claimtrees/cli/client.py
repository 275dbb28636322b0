"""HTTP client for the claimtrees API."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from claimtrees.config.constants import DEFAULT_CLIENT_TIMEOUT_SECONDS, DEFAULT_SERVER_URL


logger = logging.getLogger(__name__)


class ClientError(Exception):
    """The server could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ClaimTreesClient:
    """Thin wrapper over ``httpx.Client`` for the claim and evidence routes."""

    def __init__(
        self,
        base_url: str = DEFAULT_SERVER_URL,
        http: httpx.Client | None = None,
        timeout: float = DEFAULT_CLIENT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ClaimTreesClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ClientError(f"request to {url} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise ClientError(
                f"server error ({resp.status_code}): {_error_detail(resp)}",
                status_code=resp.status_code,
            )
        return resp.json()

    # Claims

    def create_claim(self, content: str) -> dict[str, Any]:
        return self._request("POST", "/claims", json={"content": content})

    def list_claims(self, query: str | None = None) -> list[dict[str, Any]]:
        params = {"q": query} if query else None
        return self._request("GET", "/claims", params=params)

    def get_claim(self, claim_id: str) -> dict[str, Any]:
        return self._request("GET", f"/claims/{claim_id}")

    def update_claim(self, claim_id: str, content: str) -> dict[str, Any]:
        return self._request("PUT", f"/claims/{claim_id}", json={"content": content})

    def delete_claim(self, claim_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/claims/{claim_id}")

    def link_evidence(self, claim_id: str, evidence_id: str) -> dict[str, Any]:
        return self._request(
            "POST", f"/claims/{claim_id}/evidence", json={"evidence_id": evidence_id}
        )

    # Evidence

    def create_evidence(self, file_path: str, line_ref: str, git_commit: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/evidence",
            json={"file_path": file_path, "line_ref": line_ref, "git_commit": git_commit},
        )

    def list_evidence(self) -> list[dict[str, Any]]:
        return self._request("GET", "/evidence")

    def get_evidence(self, evidence_id: str) -> dict[str, Any]:
        return self._request("GET", f"/evidence/{evidence_id}")

    def delete_evidence(self, evidence_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/evidence/{evidence_id}")

    def stale_evidence(self) -> dict[str, Any]:
        return self._request("GET", "/evidence/stale")


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return resp.text
