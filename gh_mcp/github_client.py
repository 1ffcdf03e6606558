"""Thin async binding to the GitHub REST API."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from gh_mcp import __version__
from gh_mcp.config import DEFAULT_API_URL
from gh_mcp.errors import GitHubAPIError

logger = logging.getLogger(__name__)

# largest page size the API accepts; only the first page is ever fetched
MAX_PER_PAGE = 100


class GitHubClient:
    """Owns the HTTP connection pool and auth header for the process lifetime."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": f"gh-mcp/{__version__}",
            },
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body (None when empty)."""
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise GitHubAPIError(f"Failed to connect to GitHub API: {e}") from e

        logger.info("%s %s -> %d", method, path, response.status_code)
        if response.status_code >= 400:
            raise GitHubAPIError(_error_message(response), status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"Unexpected non-JSON response from {method} {path}",
                status_code=response.status_code,
            ) from e

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------

    async def get_authenticated_user(self) -> Dict[str, Any]:
        return await self.request("GET", "/user")

    # ------------------------------------------------------------------
    # repositories
    # ------------------------------------------------------------------

    async def list_user_repos(self) -> List[Dict[str, Any]]:
        return await self.request(
            "GET", "/user/repos", params={"sort": "updated", "per_page": MAX_PER_PAGE}
        )

    async def list_org_repos(self, org: str) -> List[Dict[str, Any]]:
        return await self.request(
            "GET", _path("orgs", org, "repos"), params={"sort": "updated", "per_page": MAX_PER_PAGE}
        )

    async def create_repo(self, body: Dict[str, Any], org: Optional[str] = None) -> Dict[str, Any]:
        path = _path("orgs", org, "repos") if org else "/user/repos"
        return await self.request("POST", path, json=body)

    async def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        return await self.request("GET", _path("repos", owner, repo))

    async def delete_repo(self, owner: str, repo: str) -> None:
        await self.request("DELETE", _path("repos", owner, repo))

    async def fork_repo(self, owner: str, repo: str, organization: Optional[str] = None) -> Dict[str, Any]:
        body = {"organization": organization} if organization else None
        return await self.request("POST", _path("repos", owner, repo, "forks"), json=body)

    # ------------------------------------------------------------------
    # pull requests
    # ------------------------------------------------------------------

    async def list_pulls(self, owner: str, repo: str, state: str) -> List[Dict[str, Any]]:
        return await self.request(
            "GET",
            _path("repos", owner, repo, "pulls"),
            params={"state": state, "per_page": MAX_PER_PAGE},
        )

    async def create_pull(self, owner: str, repo: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", _path("repos", owner, repo, "pulls"), json=body)

    async def get_pull(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        return await self.request("GET", _path("repos", owner, repo, "pulls", number))

    async def update_pull(self, owner: str, repo: str, number: int, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PATCH", _path("repos", owner, repo, "pulls", number), json=body)

    async def merge_pull(self, owner: str, repo: str, number: int, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", _path("repos", owner, repo, "pulls", number, "merge"), json=body)

    async def create_review(self, owner: str, repo: str, number: int, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", _path("repos", owner, repo, "pulls", number, "reviews"), json=body)

    # ------------------------------------------------------------------
    # issues
    # ------------------------------------------------------------------

    async def list_issues(self, owner: str, repo: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        return await self.request(
            "GET",
            _path("repos", owner, repo, "issues"),
            params={**params, "per_page": MAX_PER_PAGE},
        )

    async def create_issue(self, owner: str, repo: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", _path("repos", owner, repo, "issues"), json=body)

    async def get_issue(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        return await self.request("GET", _path("repos", owner, repo, "issues", number))

    async def update_issue(self, owner: str, repo: str, number: int, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PATCH", _path("repos", owner, repo, "issues", number), json=body)

    async def create_issue_comment(self, owner: str, repo: str, number: int, body: str) -> Dict[str, Any]:
        return await self.request(
            "POST", _path("repos", owner, repo, "issues", number, "comments"), json={"body": body}
        )


def _error_message(response: httpx.Response) -> str:
    """Build '<status> <message>' from a GitHub error response."""
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    if not message:
        message = response.reason_phrase or response.text or "request failed"
    return f"{response.status_code} {message}"


def _path(*segments: Any) -> str:
    """Join URL path segments, percent-encoding each one."""
    parts = []
    for segment in segments:
        segment = str(segment)
        if segment in ("", ".", ".."):
            raise GitHubAPIError(f"Invalid URL path segment {segment!r}")
        parts.append(quote(segment, safe=""))
    return "/" + "/".join(parts)
