"""GraphQL documents and REST endpoints used by the commands.

Documents are constant text. Values always travel as separate variables and
are never formatted into the document.
"""

from __future__ import annotations

LIST_REVIEW_THREADS_QUERY = """
query($owner: String!, $repo: String!, $pr: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $pr) {
      reviewThreads(first: 100) {
        pageInfo {
          hasNextPage
        }
        nodes {
          id
          isResolved
          comments(first: 100) {
            nodes {
              id
              databaseId
              body
              path
              line
              originalLine
              author { login }
              createdAt
              url
            }
          }
        }
      }
    }
  }
}
"""

RESOLVE_THREAD_MUTATION = """
mutation($threadId: ID!) {
  resolveReviewThread(input: {threadId: $threadId}) {
    thread {
      id
      isResolved
    }
  }
}
"""

UNRESOLVE_THREAD_MUTATION = """
mutation($threadId: ID!) {
  unresolveReviewThread(input: {threadId: $threadId}) {
    thread {
      id
      isResolved
    }
  }
}
"""

# Path components below are validated (owner/repo split on "/", ids numeric)
# before they are formatted in.
REVIEW_COMMENT_ENDPOINT = "repos/{owner}/{repo}/pulls/comments/{comment_id}"
REVIEW_COMMENT_REPLIES_ENDPOINT = "repos/{owner}/{repo}/pulls/{pr_number}/comments/{comment_id}/replies"
