"""Inspect and manage pull-request review threads through the GitHub CLI."""
