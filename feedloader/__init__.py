"""Loads a feed of items from a remote JSON endpoint.

Public API lives in feedloader.domain (models, contracts, errors) and
feedloader.feed_api (transport contract, mapper, remote loader).
"""
