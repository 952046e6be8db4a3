"""Slack Integration Package.

Socket Mode entry points for the bot. Contains:

- interactions: parsing of mentions, block actions and modal submissions
- handlers: Slack Bolt handler registration feeding the inbound listener
"""
