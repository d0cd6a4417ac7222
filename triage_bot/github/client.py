"""Sets up authenticated PyGithub clients for the GitHub App."""

from github import Auth, Github, GithubIntegration

from triage_bot.utils.github import split_repository


def get_github_integration(github_app_id: int, github_app_private_key: str, github_api_url: str) -> GithubIntegration:
    """Returns an integration authenticated as the GitHub App itself."""
    if not (github_app_id and github_app_private_key):
        raise RuntimeError("GitHub App authentication requires an app id and a private key.")
    auth = Auth.AppAuth(app_id=github_app_id, private_key=github_app_private_key)
    return GithubIntegration(auth=auth, base_url=github_api_url)


def get_installation_client(integration: GithubIntegration, repo: str, installation_id: int | None = None) -> Github:
    """Returns a client scoped to the installation that covers a repository.

    Deliveries from a GitHub App carry the installation id; when it is
    missing the installation is looked up from the repository.
    """
    try:
        if installation_id is None:
            owner, repository = split_repository(repo)
            installation_id = integration.get_repo_installation(owner, repository).id
        return integration.get_github_for_installation(installation_id)
    except Exception as e:
        raise ValueError(f"Failed to get GitHub App installation for {repo}: {e}") from e
