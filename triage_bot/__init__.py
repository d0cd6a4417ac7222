"""Webhook-driven triage bot for GitHub issues and pull requests."""
