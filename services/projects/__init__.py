"""Подмодуль сервисов, связанных с проектами."""
