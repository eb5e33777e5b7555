"""
Tests for GitHubClient

PyGithub is patched out; these tests check the conversion of PyGithub
objects into plain models and the translation of GithubException.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests
from github.GithubException import GithubException, RateLimitExceededException

from prbot.config import Settings
from prbot.exceptions import (
    ConfigurationError,
    UpstreamAuthorizationError,
    UpstreamError,
)
from prbot.integrations.github.client import GitHubClient, translate_github_error


def make_pull(number=5, login="alice", sha="deadbeef"):
    pr = MagicMock()
    pr.number = number
    pr.title = f"PR {number}"
    pr.html_url = f"https://github.com/acme/widgets/pull/{number}"
    pr.user.login = login
    pr.head.sha = sha
    pr.draft = False
    pr.created_at = datetime(2024, 1, 10, tzinfo=timezone.utc)
    pr.requested_reviewers = []
    pr.requested_teams = []
    pr.mergeable = None
    pr.mergeable_state = "unknown"
    return pr


@pytest.fixture
def github_client(settings):
    with patch("prbot.integrations.github.client.Github") as mock_github:
        client = GitHubClient(settings)
        client.mock_github = mock_github.return_value
        yield client


def test_missing_token_is_configuration_error():
    settings = Settings(_env_file=None, github_token="", github_repo_owner="a", github_repo_name="b")
    with pytest.raises(ConfigurationError):
        GitHubClient(settings)


def test_missing_repo_is_configuration_error():
    settings = Settings(_env_file=None, github_token="t", github_repo_owner="", github_repo_name="")
    with pytest.raises(ConfigurationError):
        GitHubClient(settings)


def test_repo_is_loaded_lazily(github_client):
    github_client.mock_github.get_repo.assert_called_once_with("acme/widgets", lazy=True)


def test_requests_are_bounded(settings):
    bounded = settings.model_copy(update={"github_request_timeout": 7, "github_max_retries": 2})
    with patch("prbot.integrations.github.client.Github") as mock_github:
        GitHubClient(bounded)

    kwargs = mock_github.call_args.kwargs
    assert kwargs["timeout"] == 7
    assert kwargs["retry"] == 2


def test_translate_403_is_authorization_error():
    error = translate_github_error(
        GithubException(403, {"message": "Resource not accessible by integration"}, None),
        "listing check runs",
    )
    assert isinstance(error, UpstreamAuthorizationError)
    assert error.status == 403
    assert "Resource not accessible by integration" in str(error)


def test_translate_rate_limit_is_not_authorization_error():
    error = translate_github_error(
        RateLimitExceededException(403, {"message": "API rate limit exceeded"}, {}),
        "listing check runs",
    )
    assert type(error) is UpstreamError
    assert error.status == 403
    assert "API rate limit exceeded" in str(error)


def test_translate_other_status_is_upstream_error():
    error = translate_github_error(GithubException(502, "Bad Gateway", None), "listing")
    assert type(error) is UpstreamError
    assert error.status == 502


@pytest.mark.asyncio
async def test_list_open_pulls(github_client):
    github_client.repo.get_pulls.return_value = [
        make_pull(1, "alice", "aaa"),
        make_pull(2, "bob", "bbb"),
    ]

    pulls = await github_client.list_open_pulls()

    github_client.repo.get_pulls.assert_called_once_with(state="open")
    assert [(p.number, p.author, p.head_sha) for p in pulls] == [
        (1, "alice", "aaa"),
        (2, "bob", "bbb"),
    ]


@pytest.mark.asyncio
async def test_list_open_pulls_failure_is_upstream_error(github_client):
    github_client.repo.get_pulls.side_effect = GithubException(500, "boom", None)

    with pytest.raises(UpstreamError):
        await github_client.list_open_pulls()


@pytest.mark.asyncio
async def test_list_open_pulls_network_error_is_upstream_error(github_client):
    github_client.repo.get_pulls.side_effect = requests.exceptions.ConnectionError(
        "Connection reset by peer"
    )

    with pytest.raises(UpstreamError, match="GitHub request failed"):
        await github_client.list_open_pulls()


@pytest.mark.asyncio
async def test_check_runs_rate_limit_is_upstream_error(github_client):
    github_client.repo.get_commit.side_effect = RateLimitExceededException(
        403, {"message": "API rate limit exceeded"}, {}
    )

    with pytest.raises(UpstreamError) as exc_info:
        await github_client.list_check_runs("deadbeef")
    assert not isinstance(exc_info.value, UpstreamAuthorizationError)


@pytest.mark.asyncio
async def test_check_runs_read_timeout_is_upstream_error(github_client):
    github_client.repo.get_commit.side_effect = requests.exceptions.ReadTimeout("read timed out")

    with pytest.raises(UpstreamError):
        await github_client.list_check_runs("deadbeef")


@pytest.mark.asyncio
async def test_get_pull_detail(github_client):
    pr = make_pull(7)
    reviewer = MagicMock()
    reviewer.login = "carol"
    pr.requested_reviewers = [reviewer]
    github_client.repo.get_pull.return_value = pr

    detail = await github_client.get_pull(7)

    assert detail.number == 7
    assert detail.requested_reviewers == ["carol"]
    assert detail.mergeable is None
    assert detail.is_draft is False


@pytest.mark.asyncio
async def test_list_review_states(github_client):
    reviews = [MagicMock(state="COMMENTED"), MagicMock(state="APPROVED")]
    github_client.repo.get_pull.return_value.get_reviews.return_value = reviews

    assert await github_client.list_review_states(7) == ["COMMENTED", "APPROVED"]


@pytest.mark.asyncio
async def test_check_runs_403_is_authorization_error(github_client):
    github_client.repo.get_commit.side_effect = GithubException(403, {"message": "Forbidden"}, None)

    with pytest.raises(UpstreamAuthorizationError):
        await github_client.list_check_runs("deadbeef")


@pytest.mark.asyncio
async def test_list_check_runs(github_client):
    run = MagicMock(status="completed", conclusion="failure")
    run.name = "tests"
    github_client.repo.get_commit.return_value.get_check_runs.return_value = [run]

    runs = await github_client.list_check_runs("deadbeef")

    github_client.repo.get_commit.assert_called_once_with("deadbeef")
    assert runs[0].name == "tests"
    assert runs[0].conclusion == "failure"


@pytest.mark.asyncio
async def test_list_workflow_runs_filters_by_head_sha(github_client):
    run = MagicMock(status="completed", conclusion="success")
    run.name = "CI"
    github_client.repo.get_workflow_runs.return_value = [run]

    runs = await github_client.list_workflow_runs("deadbeef")

    github_client.repo.get_workflow_runs.assert_called_once_with(head_sha="deadbeef")
    assert runs[0].status == "completed"


def _threads_page(resolved, has_next=False, cursor=None):
    return (
        {},
        {
            "data": {
                "repository": {
                    "pullRequest": {
                        "reviewThreads": {
                            "nodes": [{"isResolved": value} for value in resolved],
                            "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
                        }
                    }
                }
            }
        },
    )


@pytest.mark.asyncio
async def test_unresolved_threads_paginates(github_client):
    requester = github_client.mock_github.requester
    requester.graphql_query.side_effect = [
        _threads_page([True, True], has_next=True, cursor="c1"),
        _threads_page([True, False]),
    ]

    assert await github_client.has_unresolved_threads(9) is True
    assert requester.graphql_query.call_count == 2
    second_variables = requester.graphql_query.call_args_list[1].args[1]
    assert second_variables["after"] == "c1"
    assert second_variables["number"] == 9


@pytest.mark.asyncio
async def test_all_threads_resolved(github_client):
    github_client.mock_github.requester.graphql_query.return_value = _threads_page([True])

    assert await github_client.has_unresolved_threads(9) is False


@pytest.mark.asyncio
async def test_team_members(github_client):
    member = MagicMock()
    member.login = "dave"
    org = github_client.mock_github.get_organization.return_value
    org.get_team_by_slug.return_value.get_members.return_value = [member]

    assert await github_client.list_team_members("acme", "platform") == ["dave"]
    org.get_team_by_slug.assert_called_once_with("platform")
