"""View GitLab CI job logs: section banners, step filter, collapsed sections."""
