"""Sets up the authenticated httpx client for the GitLab REST API."""

from urllib.parse import quote

import httpx


def get_gitlab_base_url(gitlab_domain: str, gitlab_project_id: str) -> str:
    """Return the REST base URL of a project on a GitLab instance.

    The domain may be given with or without a scheme. The project identifier
    may be numeric or a namespaced path, which is URL-encoded.
    """
    domain = gitlab_domain.strip().rstrip("/")
    if not domain.startswith(("http://", "https://")):
        domain = f"https://{domain}"
    project = quote(str(gitlab_project_id).strip(), safe="")
    return f"{domain}/api/v4/projects/{project}"


def get_gitlab_client(
    gitlab_domain: str,
    gitlab_project_id: str,
    gitlab_token: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Returns an httpx client authenticated against a GitLab project."""
    if not gitlab_token:
        raise RuntimeError("GitLab authentication requires gitlab_token in config.")
    return httpx.AsyncClient(
        base_url=get_gitlab_base_url(gitlab_domain, gitlab_project_id),
        headers={"PRIVATE-TOKEN": gitlab_token, "Accept": "application/json"},
        transport=transport,
    )
