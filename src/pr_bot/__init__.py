"""GitHub PR Bot - commits a file change and opens a pull request."""
