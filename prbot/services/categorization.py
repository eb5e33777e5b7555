"""
PR Categorization

Pure functions mapping PullRequestState records to report categories.
No I/O; the input records are never modified.

Each predicate answers "does this PR belong in category X?" on its own, so
one PR can land in several categories or in none.
"""

from typing import Iterable

from prbot.models.pull_request import CategorizedResult, PullRequestState, TriState

MERGEABLE_STATE_CLEAN = "clean"


def needs_attention(pr: PullRequestState) -> bool:
    """Not a draft and has unresolved review threads or requested changes."""
    return not pr.is_draft and pr.has_unresolved_comments


def needs_reviewers(pr: PullRequestState) -> bool:
    """
    Not a draft, nobody requested, and no review activity of any kind.

    A PR that was already commented on or approved without an explicit
    reviewer request does not need reviewers.
    """
    has_review_activity = pr.has_unresolved_comments or pr.has_approved_review
    return (
        not pr.is_draft
        and not pr.has_requested_reviewers
        and not has_review_activity
    )


def is_failing_ci(pr: PullRequestState) -> bool:
    """CI is known to be failing. UNKNOWN does not count. Drafts included."""
    return pr.ci_failure is TriState.TRUE


def is_ready_to_merge(pr: PullRequestState, require_ci_passing: bool = False) -> bool:
    """
    Approved, no known CI failure, and no merge conflicts.

    By default an UNKNOWN CI state does not block readiness. With
    require_ci_passing, CI must be known to pass.
    """
    if require_ci_passing:
        ci_ok = pr.ci_passing is TriState.TRUE
    else:
        ci_ok = pr.ci_failure is not TriState.TRUE

    return (
        pr.has_approved_review
        and ci_ok
        and pr.mergeable_state == MERGEABLE_STATE_CLEAN
    )


def categorize(
    prs: Iterable[PullRequestState], require_ci_passing: bool = False
) -> CategorizedResult:
    """
    Sort pull requests into the four report categories.

    Input order is preserved within each category.

    Args:
        prs: Pull request states, in listing order
        require_ci_passing: Use the strict ready-to-merge rule

    Returns:
        CategorizedResult with total set to the number of input PRs
    """
    result = CategorizedResult()

    for pr in prs:
        result.total += 1

        if needs_attention(pr):
            result.needs_attention.append(pr)

        if needs_reviewers(pr):
            result.needs_reviewers.append(pr)

        if is_failing_ci(pr):
            result.failing_ci.append(pr)

        if is_ready_to_merge(pr, require_ci_passing=require_ci_passing):
            result.ready_to_merge.append(pr)

    return result
