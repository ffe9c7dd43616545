"""Shared utilities and cross-cutting helpers."""
