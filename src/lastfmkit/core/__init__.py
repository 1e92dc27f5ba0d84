"""Signing, dispatch, configuration and other plumbing shared by all services."""
