"""GitHub PR Bot - turns a single file change into a GitHub pull request."""
