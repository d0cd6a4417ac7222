"""Tracker Client capability and its PyGithub implementation."""
