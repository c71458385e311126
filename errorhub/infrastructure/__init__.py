"""
Infrastructure layer package.

Adapters implementing domain ports: handlers, persistence, notification
channels, translation and catalog loading.
"""
