"""Remediation task tracking: task lifecycle, workflow sessions and result merging."""
