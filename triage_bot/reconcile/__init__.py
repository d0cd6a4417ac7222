"""Computes and applies label and assignee changes."""
