"""Taskdesk: task workflow service for administrators and technical managers."""
