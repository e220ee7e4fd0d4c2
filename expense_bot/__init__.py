"""Telegram bot that records expenses in a Notion database."""
