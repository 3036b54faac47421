"""Relay GitLab merge request ``/ping`` comments to Slack notifications."""
