"""Announce new YouTube uploads of a channel to a Discord channel."""
